"""Font discovery and registration for the PDF renderer.

Fonts are loaded once at startup by `load_fonts` and shared read-only between
conversion runs.
"""

from __future__ import annotations

import hashlib
import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont, TTFError

from bionic.errors import FontResourceError

logger = logging.getLogger(__name__)

_ROOT_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
_CONFIG_FONTS_DIR = os.path.join(_ROOT_DIR, "config", "fonts")

DEFAULT_FONT_SIZE = 12


@dataclass(frozen=True)
class FontResources:
    """Registered reportlab font names for the two faces used by the renderer."""

    regular: str
    bold: str
    size: float = DEFAULT_FONT_SIZE

    def face(self, name: str) -> str:
        return self.bold if name == "bold" else self.regular


def _font_dirs() -> List[str]:
    dirs: List[str] = []
    env_paths = os.environ.get("FONT_PATH", "")
    dirs.extend(p for p in env_paths.split(os.pathsep) if p.strip())
    dirs.append(_CONFIG_FONTS_DIR)
    windir = os.environ.get("WINDIR") or os.environ.get("SystemRoot")
    if windir:
        dirs.append(os.path.join(windir, "Fonts"))
    dirs.extend([
        "/usr/share/fonts/truetype",
        "/usr/local/share/fonts",
        os.path.expanduser("~/.fonts"),
        "/Library/Fonts",
        "/System/Library/Fonts/Supplemental",
    ])
    return dirs


def find_font_path(name: str) -> Optional[str]:
    """Resolve a font file name to an existing path.

    Absolute or relative paths that exist are returned as is. Otherwise the
    name is looked up case-insensitively in FONT_PATH, config/fonts and the
    usual system font directories (one level of subdirectories deep).
    """
    if os.path.isfile(name):
        return os.path.abspath(name)
    target = os.path.basename(name).lower()
    for d in _font_dirs():
        if not os.path.isdir(d):
            continue
        for root, subdirs, files in os.walk(d):
            for fname in files:
                if fname.lower() == target:
                    return os.path.join(root, fname)
            if root != d:
                subdirs[:] = []
    return None


def _register(path: str) -> str:
    stem = os.path.splitext(os.path.basename(path))[0]
    digest = hashlib.sha1(os.path.abspath(path).encode("utf-8")).hexdigest()[:8]
    font_name = f"Bionic-{stem}-{digest}"
    if font_name in pdfmetrics.getRegisteredFontNames():
        return font_name
    try:
        pdfmetrics.registerFont(TTFont(font_name, path))
    except (TTFError, OSError) as exc:
        raise FontResourceError(f"Cannot load font {path}: {exc}") from exc
    logger.debug("Registered font %s from %s", font_name, path)
    return font_name


def load_fonts(regular_path: str, bold_path: str, size: float = DEFAULT_FONT_SIZE) -> FontResources:
    """Register the regular and bold faces and return an immutable handle.

    Raises FontResourceError when either file cannot be found or parsed.
    """
    resolved = []
    for label, path in (("regular", regular_path), ("bold", bold_path)):
        found = find_font_path(path)
        if not found:
            raise FontResourceError(f"Font file for {label} face not found: {path}")
        resolved.append(found)
    regular = _register(resolved[0])
    bold = _register(resolved[1])
    logger.info("Fonts loaded: regular=%s bold=%s size=%s", resolved[0], resolved[1], size)
    return FontResources(regular=regular, bold=bold, size=size)
