import io
import os

import pytest
import reportlab
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from bionic.render.fonts import load_fonts

VERA_DIR = os.path.join(os.path.dirname(reportlab.__file__), "fonts")


@pytest.fixture(scope="session")
def fonts():
    return load_fonts(os.path.join(VERA_DIR, "Vera.ttf"), os.path.join(VERA_DIR, "VeraBd.ttf"))


def make_pdf(pages):
    """Build a PDF where each item of `pages` is a list of text lines for one page."""
    out = io.BytesIO()
    c = canvas.Canvas(out, pagesize=A4)
    for lines in pages:
        y = 800
        for line in lines:
            c.drawString(72, y, line)
            y -= 20
        c.showPage()
    c.save()
    return out.getvalue()


class FakePage:
    def __init__(self, text="", contents=True, error=None):
        self.text = text
        self.contents = contents
        self.error = error

    def get_contents(self):
        return b"BT ET" if self.contents else None

    def extract_text(self):
        if self.error is not None:
            raise self.error
        return self.text


class FakeReader:
    def __init__(self, pages):
        self.pages = list(pages)
