# --- pdfmd_lib/reconstructor.py ---
"""
pdfmd_lib/reconstructor.py: Contains the DocumentReconstructor, which drives the
page pipeline (collect, columns, reading order, lines, blocks) one page at a
time and accumulates document statistics.
"""
import logging
import re

from .analyzer import PageLayoutAnalyzer
from .classifier import BlockClassifier
from .collector import RunCollector
from .constants import MODE_SEMANTIC
from .models import DocumentText, PageText, RawPage
from .segmenter import RE_EXCESS_NEWLINES, ContentSegmenter

log_structure = logging.getLogger("pdfmd.structure")

RE_TRAILING_SPACE = re.compile(r"[ \t]+$", re.M)


class DocumentReconstructor:
    """
    Walks a list of RawPages to build the final DocumentText.
    Args:
        classify (bool): Whether to attach classified blocks to each page.
    """

    def __init__(self, classify=True):
        self.classify = classify
        self.collector = RunCollector()
        self.analyzer = PageLayoutAnalyzer()
        self.segmenter = ContentSegmenter()
        self.classifier = BlockClassifier()

    def reconstruct_page(self, page: RawPage) -> PageText:
        """Turns one page's raw runs into its canonical text."""
        runs = self.collector.collect(page)
        items = self.analyzer.analyze(page.width, runs)
        text = self.segmenter.build_page_text(items)
        blocks = self.classifier.classify_page(text) if self.classify else None
        return PageText(number=page.number, text=text, blocks=blocks)

    def build_document(self, pages: list[RawPage]) -> DocumentText:
        """Processes pages strictly in document order."""
        log_structure.info(
            "--- Reconstructing %d page(s) from positioned runs ---", len(pages)
        )
        document = DocumentText(mode=MODE_SEMANTIC)
        for page in pages:
            page_text = self.reconstruct_page(page)
            document.add_page(page_text)
            log_structure.info(
                "Page %d: %d line(s), %d char(s).",
                page_text.number,
                page_text.line_count,
                page_text.char_count,
            )
        return document


def clean_linear_page(text: str) -> str:
    """Normalizes one page of linearized text, keeping indentation."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = RE_TRAILING_SPACE.sub("", text)
    return RE_EXCESS_NEWLINES.sub("\n\n", text).strip("\n")


def split_linear_text(text: str) -> list[str]:
    """Splits linearized text on form feeds, one entry per page."""
    chunks = (text or "").split("\f")
    if len(chunks) > 1 and not chunks[-1].strip():
        chunks.pop()
    return [clean_linear_page(chunk) for chunk in chunks]


def build_linear_document(
    text: str, mode: str, classify=False, pages_to_process=None
) -> DocumentText:
    """Naive strategy: pages come pre-ordered from the text extractor."""
    classifier = BlockClassifier() if classify else None
    document = DocumentText(mode=mode)
    for number, page_text in enumerate(split_linear_text(text), start=1):
        if pages_to_process and number not in pages_to_process:
            continue
        blocks = classifier.classify_page(page_text) if classifier else None
        document.add_page(
            PageText(number=number, text=page_text, blocks=blocks, structural=False)
        )
    log_structure.debug("Split linearized text into %d page(s).", len(document.pages))
    return document
