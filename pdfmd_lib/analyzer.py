# --- pdfmd_lib/analyzer.py ---
"""
pdfmd_lib/analyzer.py: Contains the PageLayoutAnalyzer, which detects the column
structure of a page and puts its runs into reading order.
"""
import logging

from .constants import COLUMN_GUTTER_GUARD, COLUMN_MIN_RUNS
from .models import ColumnItem, TextRun

log_layout = logging.getLogger("pdfmd.layout")


class PageLayoutAnalyzer:
    """
    Decides between single- and two-column layouts from the horizontal
    distribution of run left edges, then orders runs column by column.
    """

    def __init__(self, gutter_guard=COLUMN_GUTTER_GUARD, min_runs=COLUMN_MIN_RUNS):
        self.gutter_guard = gutter_guard
        self.min_runs = min_runs

    def is_two_column(self, width, runs: list[TextRun]) -> bool:
        """Detects a two-column page: enough runs clearly left and right of center."""
        if not width or width <= 0:
            return False
        mid = width / 2
        left_count = sum(1 for r in runs if r.left < mid - self.gutter_guard)
        right_count = sum(1 for r in runs if r.left > mid + self.gutter_guard)
        two_col = left_count > self.min_runs and right_count > self.min_runs
        log_layout.debug(
            "Column check: left=%d, right=%d (need > %d each). Decision: %d column(s).",
            left_count,
            right_count,
            self.min_runs,
            2 if two_col else 1,
        )
        return two_col

    def assign_columns(self, width, runs: list[TextRun]) -> tuple[bool, list[ColumnItem]]:
        """Tags every run with its column index."""
        two_col = self.is_two_column(width, runs)
        mid = width / 2 if width else 0
        items = [
            ColumnItem(
                r.top, r.left, r.font_size, r.bold, r.text, col=1 if two_col and r.left > mid else 0
            )
            for r in runs
        ]
        return two_col, items

    @staticmethod
    def sort_reading_order(items: list[ColumnItem]) -> list[ColumnItem]:
        """Orders items left column first, then top-to-bottom, then left-to-right."""
        return sorted(items, key=lambda i: (i.col, i.top, i.left))

    def analyze(self, width, runs: list[TextRun]) -> list[ColumnItem]:
        """Returns the page's runs, column-tagged and in reading order."""
        _, items = self.assign_columns(width, runs)
        return self.sort_reading_order(items)
