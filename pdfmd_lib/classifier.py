# --- pdfmd_lib/classifier.py ---
"""
pdfmd_lib/classifier.py: Contains the BlockClassifier, which labels page text
blocks as headings, list items or paragraphs for light markup.

This is a presentation pass only. It re-reads the canonical page text and never
feeds back into it, so its block boundaries may differ from the segmenter's.
"""
import logging
import re

from .constants import (
    HEADING_MAX_CHARS,
    KIND_HEADING,
    KIND_LIST_ITEM,
    KIND_PARAGRAPH,
    RE_LIST_MARKER,
    RE_OUTLINE_HEADING,
    RE_WHITESPACE,
    TERMINAL_PUNCTUATION,
)
from .models import Block

log_render = logging.getLogger("pdfmd.render")

RE_BLANK_LINES = re.compile(r"\n\s*\n")


def _flatten(lines) -> str:
    return RE_WHITESPACE.sub(" ", " ".join(lines)).strip()


def is_heading(text: str) -> bool:
    """Numeric outline prefix ("1.2 Scope"), or a short all-caps line."""
    if RE_OUTLINE_HEADING.match(text):
        return True
    return len(text) < HEADING_MAX_CHARS and text.isupper()


def strip_list_marker(text: str) -> str | None:
    """Returns the text without its bullet/number/citation marker, or None."""
    m = RE_LIST_MARKER.match(text)
    if not m:
        return None
    return text[m.end() :].strip()


class BlockClassifier:
    """
    Splits page text on blank lines and labels each resulting block.
    """

    def group_blocks(self, text: str) -> list[list[str]]:
        """Splits text into blocks, rejoining chunks that end mid-sentence."""
        groups = []
        for chunk in RE_BLANK_LINES.split(text or ""):
            lines = [line.strip() for line in chunk.split("\n") if line.strip()]
            if not lines:
                continue
            if groups and self._continues(groups[-1], lines):
                log_render.debug("Rejoining block continued after a break: %r", lines[0])
                groups[-1].extend(lines)
            else:
                groups.append(lines)
        return groups

    def _continues(self, prev_lines, lines) -> bool:
        """A block without terminal punctuation runs on, unless either side is
        a heading or the next block opens a new list item."""
        if prev_lines[-1].endswith(TERMINAL_PUNCTUATION):
            return False
        prev_text, next_text = _flatten(prev_lines), _flatten(lines)
        if is_heading(prev_text) or is_heading(next_text):
            return False
        return strip_list_marker(next_text) is None

    def classify(self, text: str) -> Block:
        """Labels a single block's flattened text."""
        text = RE_WHITESPACE.sub(" ", text).strip()
        if is_heading(text):
            return Block(KIND_HEADING, text)
        stripped = strip_list_marker(text)
        if stripped is not None:
            return Block(KIND_LIST_ITEM, stripped)
        return Block(KIND_PARAGRAPH, text)

    def classify_page(self, text: str) -> list[Block]:
        """Returns the ordered (kind, text) blocks for a page's final text."""
        return [self.classify(_flatten(lines)) for lines in self.group_blocks(text)]
