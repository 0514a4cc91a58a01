# --- pdfmd_lib/models.py ---
"""
pdfmd_lib/models.py: Data models for positioned text runs and reconstructed pages.
"""
import logging
from dataclasses import dataclass, field

from .constants import KIND_PARAGRAPH

log_structure = logging.getLogger("pdfmd.structure")


# --- COLLABORATOR INPUT (RAW RECORDS) ---
@dataclass
class RawRun:
    """One `<text>` record as produced by structural extraction."""

    top: float
    left: float
    font: str
    text: str  # markup-wrapped, entities still encoded


@dataclass
class RawPage:
    """A page as handed over by a structural source, before any filtering."""

    number: int
    height: float = 0
    width: float = 0
    fonts: dict = field(default_factory=dict)  # font id -> size
    runs: list = field(default_factory=list)


# --- PAGE-LEVEL WORKING MODEL ---
@dataclass
class TextRun:
    """A normalized, positioned string that survived collection."""

    top: float
    left: float
    font_size: float
    bold: bool
    text: str


@dataclass
class ColumnItem(TextRun):
    """A TextRun placed in column 0 (left/primary) or 1 (right)."""

    col: int = 0


class Line:
    """A visual text row built from one or more runs during the merge pass."""

    def __init__(self, item: ColumnItem):
        self.col, self.top, self.left = item.col, item.top, item.left
        self.font_size, self.bold = item.font_size, item.bold
        self.parts = [item.text]

    @property
    def text(self) -> str:
        return " ".join(self.parts)

    def accepts(self, item: ColumnItem, jitter: float, max_span: float) -> bool:
        """Checks if a run sits on this line's row within the merge tolerances."""
        return (
            item.col == self.col
            and abs(self.top - item.top) <= jitter
            and abs(self.left - item.left) < max_span
        )

    def absorb(self, item: ColumnItem):
        """Appends a run to this line, widening its style flags."""
        self.parts.append(item.text)
        self.font_size = max(self.font_size, item.font_size)
        self.bold = self.bold or item.bold

    def __repr__(self):
        return f"Line(col={self.col}, top={self.top}, left={self.left}, text={self.text!r})"


@dataclass
class Block:
    """A classified unit of page text used for markup rendering."""

    kind: str = KIND_PARAGRAPH
    text: str = ""


# --- OUTPUT MODEL ---
@dataclass
class PageText:
    """The final text of one page, plus its classified blocks when available."""

    number: int
    text: str
    blocks: list | None = None
    structural: bool = True

    @property
    def line_count(self) -> int:
        return len(self.text.split("\n")) if self.text else 0

    @property
    def char_count(self) -> int:
        return len(self.text)


@dataclass
class ExtractionStats:
    """Running totals across all processed pages."""

    pages: int = 0
    lines: int = 0
    chars: int = 0

    def add_page(self, page: PageText):
        self.pages += 1
        self.lines += page.line_count
        self.chars += page.char_count

    def as_dict(self) -> dict:
        return {"pageCount": self.pages, "lineCount": self.lines, "charCount": self.chars}


@dataclass
class DocumentText:
    """All reconstructed pages of a document and their aggregate stats."""

    mode: str
    pages: list = field(default_factory=list)
    stats: ExtractionStats = field(default_factory=ExtractionStats)

    def add_page(self, page: PageText):
        self.pages.append(page)
        self.stats.add_page(page)
        log_structure.debug(
            "Page %d: %d lines, %d chars.", page.number, page.line_count, page.char_count
        )

    def get_text(self, separator="\n\n") -> str:
        """Returns all page texts joined by the given separator."""
        return separator.join(p.text for p in self.pages)
