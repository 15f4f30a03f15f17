import os, logging

def env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    if raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None

def env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    if raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None

def configure_logging(level=None):
    level = level or os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=level, format="[%(name)s] %(levelname)s %(message)s")
