import os
import time


def render_status(context, width):
    """
    context keys: status_msg, status_until, mode, file_path, shape,
                   total_rows, shown_rows, columns, sort, filter,
                   first_row, last_row, error
    """
    text = ""
    now = time.time()
    if context.get("status_msg") and now < context.get("status_until", 0):
        text = f" {context['status_msg']}"
    else:
        mode = context.get("mode", "grid").upper()
        fname = context.get("file_path") or ""
        if fname:
            fname = os.path.basename(fname)
        else:
            fname = "[sample]"

        if context.get("error"):
            text = f" {mode} | {fname} | {context['error']}"
        elif mode == "GRID":
            shown = context.get("shown_rows", 0)
            total = context.get("total_rows", 0)
            first = context.get("first_row", 0)
            last = context.get("last_row", 0)
            rows = f"{shown} rows" if shown == total else f"{shown} of {total} rows"
            view = f"rows {first}-{last}" if shown else "no rows"
            parts = [f" {mode}", fname, f"{context.get('shape', '')}", rows, view]
            if context.get("sort"):
                parts.append(f"sort {context['sort']}")
            if context.get("filter"):
                parts.append(f"filter '{context['filter']}'")
            text = " | ".join(parts)
        else:
            nodes = context.get("nodes", 0)
            text = f" {mode} | {fname} | {nodes} lines"

    return text.ljust(width)[:width]
