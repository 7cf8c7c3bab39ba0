import json
import logging
import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "jsongrid")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "jsongrid.log")

# default settings
OVERSCAN_DEFAULT = 5
MAX_COL_WIDTH_DEFAULT = 40
INDENT_DEFAULT = 2
LOG_LEVEL_DEFAULT = "WARNING"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

logger = logging.getLogger(__name__)


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def _int_setting(data, key, default, minimum):
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    if value < minimum:
        return default
    return value


def load_config():
    cfg = {
        "OVERSCAN": OVERSCAN_DEFAULT,
        "MAX_COL_WIDTH": MAX_COL_WIDTH_DEFAULT,
        "INDENT": INDENT_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_JSON, exc)
        return cfg

    if not isinstance(data, dict):
        return cfg

    cfg["OVERSCAN"] = _int_setting(data, "overscan", OVERSCAN_DEFAULT, 0)
    cfg["MAX_COL_WIDTH"] = _int_setting(data, "max_col_width", MAX_COL_WIDTH_DEFAULT, 4)
    cfg["INDENT"] = _int_setting(data, "indent", INDENT_DEFAULT, 0)

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() in _LOG_LEVELS:
        cfg["LOG_LEVEL"] = level.upper()

    return cfg
