def wrap_cell(text: str, width: int, max_lines: int | None = None) -> list[str]:
    """Word-wrap text to width, hard-breaking words longer than a line."""
    if width <= 0:
        return [""] * (max_lines or 1)

    lines: list[str] = []
    for part in (text.split("\n") if text else [""]):
        current = ""
        for word in part.split(" "):
            if current and len(current) + 1 + len(word) <= width:
                current = f"{current} {word}"
                continue
            if current:
                lines.append(current)
                current = ""
            while len(word) > width:
                lines.append(word[:width])
                word = word[width:]
            current = word
        lines.append(current)

    if max_lines is not None:
        lines = lines[:max_lines]
        while len(lines) < max_lines:
            lines.append("")
    return lines or [""]


def wrap_line_count(text: str, width: int) -> int:
    if width <= 0:
        return 1
    return max(1, len(wrap_cell(text, width)))
