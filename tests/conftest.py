import pytest

from pdfmd_lib.models import RawPage, RawRun


def _build_page(runs, height=1000, width=800, fonts=None, number=1):
    return RawPage(
        number=number,
        height=height,
        width=width,
        fonts={"0": 12} if fonts is None else fonts,
        runs=[r if isinstance(r, RawRun) else RawRun(*r) for r in runs],
    )


@pytest.fixture
def make_page():
    """Builds a RawPage from (top, left, font, text) tuples."""
    return _build_page


@pytest.fixture
def scenario_page():
    """A heading followed by a two-line paragraph on a single-column page."""
    return _build_page(
        [
            (120, 80, "0", "<b>INTRODUCTION</b>"),
            (160, 80, "1", "Paragraph line one."),
            (176, 80, "1", "Paragraph line two."),
        ],
        fonts={"0": 18, "1": 12},
    )


@pytest.fixture
def two_column_page():
    """26 runs clearly left and 26 clearly right of the centerline."""
    runs = []
    for i in range(26):
        top = 100 + i * 20
        runs.append((top, 60, "0", f"Left {i}."))
        runs.append((top, 460, "0", f"Right {i}."))
    return _build_page(runs)


PDF2XML = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE pdf2xml SYSTEM "pdf2xml.dtd">
<pdf2xml>
  <page number="1" position="absolute" top="0" left="0" height="1000" width="800">
    <fontspec id="0" size="18" family="MockSans" color="#000000"/>
    <fontspec id="1" size="12" family="MockSans" color="#000000"/>
    <text top="120" left="80" width="220" height="20" font="0"><b>INTRODUCTION</b></text>
    <text top="160" left="80" width="500" height="14" font="1">This is a semantic paragraph line one.</text>
    <text top="176" left="80" width="500" height="14" font="1">This is semantic paragraph line two.</text>
  </page>
  <page number="2" position="absolute" top="0" left="0" height="1000" width="800">
    <text top="140" left="80" width="500" height="14" font="1">Second page &amp; <i>semantic</i> content.</text>
  </page>
</pdf2xml>
"""


@pytest.fixture
def pdf2xml_text():
    """pdftohtml -xml output for a two-page document."""
    return PDF2XML
