# --- pdfmd_lib/sources.py ---
"""
pdfmd_lib/sources.py: Produces raw page records for the reconstructor.

Three sources are supported:
- pdftohtml -xml output, decoded from its <page>/<fontspec>/<text> elements.
- pdfminer.six layout analysis, run in-process.
- pdftotext linearized output, for the naive (pre-ordered) strategy.
"""
import html
import logging
import os
import shutil
import subprocess
import tempfile
import xml.etree.ElementTree as ET
from collections import Counter
from xml.sax.saxutils import escape

from pdfminer.high_level import extract_pages
from pdfminer.layout import LTChar, LTTextLine

from .constants import DEFAULT_TOOL_TIMEOUT, PDFTOHTML_ZOOM, TEXT_MODES
from .models import RawPage, RawRun

log_source = logging.getLogger("pdfmd.source")


class ExtractionError(RuntimeError):
    """Raised when an external extraction step fails or returns bad data."""


def _to_number(value, default=0):
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _inner_markup(element) -> str:
    """Returns an element's inner XML (text plus child tags), entities re-escaped."""
    parts = [escape(element.text or "")]
    for child in element:
        parts.append(ET.tostring(child, encoding="unicode"))
    return "".join(parts)


# --- PDFTOHTML XML ---
def parse_pdf2xml(xml_source) -> list[RawPage]:
    """
    Decodes pdftohtml's XML into RawPages.
    Args:
        xml_source: A path, a file object, or the XML document as a string.
    """
    try:
        if isinstance(xml_source, str) and xml_source.lstrip().startswith("<"):
            root = ET.fromstring(xml_source.encode("utf-8"))
        else:
            root = ET.parse(xml_source).getroot()
    except ET.ParseError as e:
        raise ExtractionError(f"Could not parse structural XML: {e}") from e

    pages, fonts = [], {}
    for idx, page_el in enumerate(root.iter("page"), start=1):
        # Font specs are emitted once, on the first page that uses them.
        for spec in page_el.iter("fontspec"):
            fonts[spec.get("id")] = _to_number(spec.get("size"), None)
        page = RawPage(
            number=int(_to_number(page_el.get("number"), idx)),
            height=_to_number(page_el.get("height")),
            width=_to_number(page_el.get("width")),
            fonts={k: v for k, v in fonts.items() if v is not None},
        )
        for text_el in page_el.iter("text"):
            page.runs.append(
                RawRun(
                    top=_to_number(text_el.get("top")),
                    left=_to_number(text_el.get("left")),
                    font=text_el.get("font"),
                    text=_inner_markup(text_el),
                )
            )
        log_source.debug(
            "Decoded page %d (%gx%g) with %d runs.",
            page.number,
            page.width,
            page.height,
            len(page.runs),
        )
        pages.append(page)
    return pages


# --- PDFMINER ---
def _find_elements_by_type(obj, t):
    """Recursively finds all layout elements of a specific type."""
    e = []
    if isinstance(obj, t):
        e.append(obj)
    if hasattr(obj, "_objs"):
        for child in obj:
            e.extend(_find_elements_by_type(child, t))
    return e


def _line_style(line):
    """Gets the most common font size of a line, and whether any char is bold."""
    chars = [c for c in line if isinstance(c, LTChar)]
    if not chars:
        return None, False
    size = Counter(round(c.size, 1) for c in chars).most_common(1)[0][0]
    return size, any("bold" in c.fontname.lower() for c in chars)


def page_from_layout(layout, zoom=PDFTOHTML_ZOOM) -> RawPage:
    """
    Converts a pdfminer LTPage into a RawPage with top-left origin coordinates,
    scaled from PDF points into pdftohtml's coordinate space.
    """
    page = RawPage(
        number=layout.pageid, height=layout.height * zoom, width=layout.width * zoom
    )
    font_ids = {}
    for line in _find_elements_by_type(layout, LTTextLine):
        size, bold = _line_style(line)
        if size is None:
            continue
        font_id = font_ids.setdefault(size, str(len(font_ids)))
        text = html.escape(line.get_text(), quote=False)
        page.runs.append(
            RawRun(
                top=max(0, layout.height - line.y1) * zoom,
                left=max(0, line.x0) * zoom,
                font=font_id,
                text=f"<b>{text}</b>" if bold else text,
            )
        )
    page.fonts = {font_id: size * zoom for size, font_id in font_ids.items()}
    return page


def extract_pdfminer_pages(pdf_path, pages_to_process=None) -> list[RawPage]:
    """Builds RawPages for a PDF using pdfminer.six layout analysis."""
    log_source.info("Running pdfminer layout analysis on %s", pdf_path)
    pages = []
    for layout in extract_pages(pdf_path):
        if pages_to_process and layout.pageid not in pages_to_process:
            continue
        pages.append(page_from_layout(layout))
    return pages


# --- POPPLER TOOLS ---
def _run_tool(cmd, timeout):
    """Runs a poppler command line tool, translating failures to ExtractionError."""
    tool = cmd[0]
    if shutil.which(tool) is None:
        raise ExtractionError(f"Missing dependency: {tool}. Install poppler and retry.")
    log_source.debug("Command: %s", " ".join(cmd))
    try:
        return subprocess.run(cmd, check=True, timeout=timeout, capture_output=True)
    except subprocess.TimeoutExpired as e:
        raise ExtractionError(f"{tool} timed out after {timeout} seconds") from e
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or b"").decode("utf-8", errors="replace").strip()
        message = f"{tool} failed with exit code {e.returncode}"
        if stderr:
            message = f"{message}: {stderr}"
        raise ExtractionError(message) from e


def run_pdftohtml(pdf_path, timeout=DEFAULT_TOOL_TIMEOUT) -> list[RawPage]:
    """Runs `pdftohtml -xml` in a scratch directory and decodes its output."""
    with tempfile.TemporaryDirectory(prefix="pdfmd-") as tmp_dir:
        xml_path = os.path.join(tmp_dir, "structure.xml")
        cmd = ["pdftohtml", "-xml", "-i", "-q", "-nodrm", "-enc", "UTF-8", pdf_path, xml_path]
        log_source.info("Running pdftohtml on %s", pdf_path)
        _run_tool(cmd, timeout)
        if not os.path.exists(xml_path):
            raise ExtractionError("pdftohtml produced no XML output")
        return parse_pdf2xml(xml_path)


def run_pdftotext(pdf_path, mode="default", timeout=DEFAULT_TOOL_TIMEOUT) -> str:
    """Runs `pdftotext` in the given mode and returns its linearized text."""
    if mode not in TEXT_MODES:
        raise ValueError(f"Unknown text mode: {mode}")
    cmd = ["pdftotext", "-enc", "UTF-8", *TEXT_MODES[mode], pdf_path, "-"]
    log_source.info("Running pdftotext (%s) on %s", mode, pdf_path)
    result = _run_tool(cmd, timeout)
    return result.stdout.decode("utf-8", errors="replace")
