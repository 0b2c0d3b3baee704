import logging
import os

ROOT_LOGGER = "detailing"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def _level_from_env() -> int:
    # getLevelName maps known names to ints and anything else to a string
    level = logging.getLevelName(os.environ.get("LOG_LEVEL", "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
        root.setLevel(_level_from_env())
    return root


def get_logger(name: str) -> logging.Logger:
    """Module logger under ``detailing``; the shared handler is added once per process,
    so Streamlit reruns do not duplicate output."""
    _configure_root()
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
