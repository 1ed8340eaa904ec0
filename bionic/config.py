import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "dependencies.json")

MAX_INPUT_BYTES = 10 << 20
UPLOAD_FIELD = "pdfFile"
OUTPUT_FILENAME = "book.pdf"


@dataclass(frozen=True)
class Settings:
    font_regular: str = os.path.join(PROJECT_ROOT, "config", "fonts", "georgia.ttf")
    font_bold: str = os.path.join(PROJECT_ROOT, "config", "fonts", "georgiab.ttf")
    font_size: float = 12
    max_input_bytes: int = MAX_INPUT_BYTES
    log_level: str = "INFO"
    buffer_dir: str = os.path.join(PROJECT_ROOT, "config", "buffer")


def _resolve_path(base: str, relative: str) -> str:
    return os.path.abspath(os.path.join(base, relative))


def configure_dependencies(config_path: Optional[str] = None) -> Settings:
    """Load settings from config/dependencies.json, falling back to defaults.

    Relative paths in the file are resolved against the project root. A
    missing or unreadable file is logged and yields the defaults.
    """
    deps_path = config_path or DEFAULT_CONFIG_PATH
    defaults = Settings()

    if not os.path.exists(deps_path):
        logger.warning("dependencies.json not found at %s; using defaults", deps_path)
        return defaults

    try:
        with open(deps_path, "r", encoding="utf-8") as deps_file:
            deps = json.load(deps_file) or {}
    except (OSError, ValueError) as exc:
        logger.warning("Could not load dependencies from %s: %s", deps_path, exc)
        return defaults

    font_regular = defaults.font_regular
    if deps.get("font_regular"):
        font_regular = _resolve_path(PROJECT_ROOT, deps["font_regular"])
    font_bold = defaults.font_bold
    if deps.get("font_bold"):
        font_bold = _resolve_path(PROJECT_ROOT, deps["font_bold"])
    buffer_dir = defaults.buffer_dir
    if deps.get("buffer_dir"):
        buffer_dir = _resolve_path(PROJECT_ROOT, deps["buffer_dir"])

    for label, path in (("font_regular", font_regular), ("font_bold", font_bold)):
        if not os.path.exists(path):
            logger.warning("Font path from config does not exist: %s=%s", label, path)

    try:
        font_size = float(deps.get("font_size", defaults.font_size))
        max_input_bytes = int(deps.get("max_input_bytes", defaults.max_input_bytes))
    except (TypeError, ValueError) as exc:
        logger.warning("Invalid numeric value in %s: %s; using defaults", deps_path, exc)
        font_size, max_input_bytes = defaults.font_size, defaults.max_input_bytes

    return Settings(
        font_regular=font_regular,
        font_bold=font_bold,
        font_size=font_size,
        max_input_bytes=max_input_bytes,
        log_level=str(deps.get("log_level", defaults.log_level)).upper(),
        buffer_dir=buffer_dir,
    )
