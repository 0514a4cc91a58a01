# --- pdfmd_lib/constants.py ---
"""
pdfmd_lib/constants.py: Layout thresholds, noise patterns and mode registries.

The numeric thresholds are empirically tuned against poppler's pdftohtml
coordinate space. They are fixed values, not user options; revisit them as a
group when calibrating against a new corpus.
"""
import re

# --- RUN COLLECTOR ---
MARGIN_BAND = 80  # distance from the top/bottom page edge treated as header/footer
DEFAULT_FONT_SIZE = 12

# --- COLUMN CLASSIFIER ---
COLUMN_GUTTER_GUARD = 40  # runs this close to the centerline count for neither side
COLUMN_MIN_RUNS = 25  # each side needs strictly more runs than this

# --- LINE MERGER ---
LINE_TOP_JITTER = 3
LINE_MAX_SPAN = 500

# --- BLOCK SEGMENTER ---
PARAGRAPH_GAP_FACTOR = 1.45
PARAGRAPH_MIN_GAP = 14

# --- BLOCK CLASSIFIER ---
HEADING_MAX_CHARS = 90
TERMINAL_PUNCTUATION = (".", "!", "?", ";", ":")

KIND_HEADING = "heading"
KIND_LIST_ITEM = "list_item"
KIND_PARAGRAPH = "paragraph"

# --- NOISE PATTERNS ---
XML_ENTITIES = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&amp;", "&"),  # last, so "&amp;lt;" decodes to "&lt;" and not "<"
)

RE_TAG = re.compile(r"<[^>]*>")
RE_BOLD_TAG = re.compile(r"<(?:b|strong)(?:\s[^>]*)?>", re.I)
RE_WHITESPACE = re.compile(r"\s+")

NOISE_PATTERNS = {
    "page_number": re.compile(r"^((page|pág\.?)\s+)?\s*-?\s*\d+\s*-?\s*$", re.I),
    "running_header": re.compile(
        r"^(?:page|pg\.?|p\.)\s*\d+(?:\s*(?:of|/)\s*\d+)?"
        r"\s*(?:[|:\u2013\u2014-]\s*.{0,60})?$",  # optional short running title
        re.I,
    ),
    "copyright": re.compile(
        r"^(?:©|\(c\)|copyright\b)|\ball rights reserved\b", re.I
    ),
    "blank_page": re.compile(r"\bthis page (?:is )?intentionally (?:left )?blank\b", re.I),
}

# --- BLOCK MARKERS ---
RE_OUTLINE_HEADING = re.compile(r"^\d+(?:\.\d+)*\s+\S")
RE_LIST_MARKER = re.compile(r"^(?:[-*•]\s+|\d+[.)]\s+|\[\d+\]\s*)")

# --- EXTRACTION MODES ---
MODE_SEMANTIC = "semantic"
TEXT_MODES = {
    "default": [],
    "layout": ["-layout"],
    "raw": ["-raw"],
}
MODES = [MODE_SEMANTIC] + list(TEXT_MODES)

ENGINE_PDFTOHTML = "pdftohtml"
ENGINE_PDFMINER = "pdfminer"
ENGINES = [ENGINE_PDFTOHTML, ENGINE_PDFMINER]

OUTPUT_FORMATS = {"markdown": ".md", "text": ".txt"}

DEFAULT_TOOL_TIMEOUT = 600

# pdftohtml -xml renders at this zoom by default; pdfminer reports PDF points.
PDFTOHTML_ZOOM = 1.5
