# --- pdfmd_lib/collector.py ---
"""
pdfmd_lib/collector.py: Contains the RunCollector, the single sanitization point
for positioned text runs.
"""
import logging
from collections import Counter

from .constants import (
    DEFAULT_FONT_SIZE,
    MARGIN_BAND,
    NOISE_PATTERNS,
    RE_BOLD_TAG,
    RE_TAG,
    RE_WHITESPACE,
    XML_ENTITIES,
)
from .models import RawPage, TextRun

log_collect = logging.getLogger("pdfmd.collect")


def normalize_run_text(markup: str) -> str:
    """Strips inline tags, decodes XML entities and collapses whitespace."""
    text = RE_TAG.sub("", markup or "")
    for entity, char in XML_ENTITIES:
        text = text.replace(entity, char)
    return RE_WHITESPACE.sub(" ", text).strip()


def match_noise(text: str) -> str | None:
    """Returns the name of the structural-noise pattern a text matches, if any."""
    for name, pattern in NOISE_PATTERNS.items():
        if pattern.search(text):
            return name
    return None


class RunCollector:
    """
    Turns a page's raw run records into filtered, normalized TextRuns.
    Drops empty text, runs inside the top/bottom margin bands, and page-level
    clutter (page numbers, running headers, copyright lines, blank-page marks).
    """

    def __init__(self, margin=MARGIN_BAND, default_font_size=DEFAULT_FONT_SIZE):
        self.margin = margin
        self.default_font_size = default_font_size

    def collect(self, page: RawPage) -> list[TextRun]:
        """Collects the surviving TextRuns of a single page."""
        runs, dropped = [], Counter()
        for raw in page.runs:
            text = normalize_run_text(raw.text)
            if not text:
                dropped["empty"] += 1
                continue
            if self._in_margin(raw.top, page.height):
                dropped["margin"] += 1
                continue
            noise = match_noise(text)
            if noise:
                dropped[noise] += 1
                continue
            runs.append(
                TextRun(
                    top=raw.top,
                    left=raw.left,
                    font_size=self._resolve_font_size(raw.font, page.fonts),
                    bold=bool(RE_BOLD_TAG.search(raw.text or "")),
                    text=text,
                )
            )
        if dropped:
            log_collect.debug(
                "Page %d: kept %d runs, dropped %s",
                page.number,
                len(runs),
                dict(dropped),
            )
        return runs

    def _in_margin(self, top, height):
        if not height or height <= 0:
            return False
        return top < self.margin or top > height - self.margin

    def _resolve_font_size(self, font_id, fonts):
        size = fonts.get(font_id)
        if size is None:
            return self.default_font_size
        return size
