# --- pdfmd_lib/segmenter.py ---
"""
pdfmd_lib/segmenter.py: Contains the ContentSegmenter, which merges ordered runs
into lines and inserts paragraph breaks between them.
"""
import logging
import re

from .constants import (
    LINE_MAX_SPAN,
    LINE_TOP_JITTER,
    PARAGRAPH_GAP_FACTOR,
    PARAGRAPH_MIN_GAP,
)
from .models import ColumnItem, Line

log_structure = logging.getLogger("pdfmd.structure")

RE_EXCESS_NEWLINES = re.compile(r"\n{3,}")


class ContentSegmenter:
    """
    Builds the canonical text of a page from its reading-ordered runs.
    """

    def __init__(
        self,
        jitter=LINE_TOP_JITTER,
        max_span=LINE_MAX_SPAN,
        gap_factor=PARAGRAPH_GAP_FACTOR,
        min_gap=PARAGRAPH_MIN_GAP,
    ):
        self.jitter, self.max_span = jitter, max_span
        self.gap_factor, self.min_gap = gap_factor, min_gap

    def merge_lines(self, items: list[ColumnItem]) -> list[Line]:
        """Coalesces consecutive runs on the same visual row into Lines."""
        lines, current = [], None
        for item in items:
            if current and current.accepts(item, self.jitter, self.max_span):
                current.absorb(item)
                continue
            if current:
                lines.append(current)
            current = Line(item)
        if current:
            lines.append(current)
        log_structure.debug("Merged %d runs into %d lines.", len(items), len(lines))
        return lines

    def is_paragraph_break(self, line: Line, prev: Line) -> bool:
        """A column change or a gap wider than ~1.45 line-heights starts a block."""
        if line.col != prev.col:
            return True
        return (line.top - prev.top) > max(self.min_gap, line.font_size * self.gap_factor)

    def segment(self, lines: list[Line]) -> str:
        """Joins lines into page text, with a blank line between blocks."""
        out, prev = [], None
        for line in lines:
            text = line.text.strip()
            if not text:
                continue
            if prev is not None and self.is_paragraph_break(line, prev):
                out.append("")
            out.append(text)
            prev = line
        return RE_EXCESS_NEWLINES.sub("\n\n", "\n".join(out)).strip()

    def build_page_text(self, items: list[ColumnItem]) -> str:
        """Runs the merge and segmentation passes over one page."""
        return self.segment(self.merge_lines(items))
