import logging

import config_paths

LOGGER_NAME = "jsongrid"


def setup_logging(level: str = config_paths.LOG_LEVEL_DEFAULT, log_path: str | None = None) -> logging.Logger:
    """Send log records to a file; curses owns the terminal while the app runs.

    Module loggers are plain getLogger(__name__) loggers, so the handler goes
    on the root logger and is added only once.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.WARNING))

    if not any(getattr(h, "_jsongrid", False) for h in root.handlers):
        path = log_path or config_paths.LOG_PATH
        try:
            if log_path is None:
                config_paths.ensure_config_dirs()
            handler = logging.FileHandler(path, encoding="utf-8")
        except OSError:
            handler = logging.NullHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        handler._jsongrid = True
        root.addHandler(handler)

    return logging.getLogger(LOGGER_NAME)
