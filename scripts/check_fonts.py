from __future__ import annotations

import sys
from typing import List

from reportlab.pdfbase.ttfonts import TTFont

from bionic.config import configure_dependencies
from bionic.render.fonts import find_font_path

SAMPLE_TEXT = "Hello, world! Ça déjà vu: naïve façade, Größe, señor"


def missing_glyphs(path: str, sample: str = SAMPLE_TEXT) -> List[str]:
    """Characters of `sample` the font at `path` has no glyph for."""
    font = TTFont("check", path)
    cmap = font.face.charToGlyph
    return sorted({ch for ch in sample if not ch.isspace() and ord(ch) not in cmap})


def main() -> int:
    settings = configure_dependencies()
    status = 0
    for label, name in (("regular", settings.font_regular), ("bold", settings.font_bold)):
        path = find_font_path(name)
        if not path:
            print(f"{label}: font not found: {name}")
            status = 1
            continue
        try:
            missing = missing_glyphs(path)
        except Exception as exc:
            print(f"{label}: cannot load {path}: {exc}")
            status = 1
            continue
        if missing:
            print(f"{label}: {path} lacks glyphs for: {' '.join(missing)}")
        else:
            print(f"{label}: {path} OK")
    return status


if __name__ == "__main__":
    sys.exit(main())
