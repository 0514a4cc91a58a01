# --- pdfmd_lib/api.py ---
import logging
import os

from .constants import (
    DEFAULT_TOOL_TIMEOUT,
    ENGINE_PDFMINER,
    ENGINE_PDFTOHTML,
    ENGINES,
    MODE_SEMANTIC,
    MODES,
)
from .models import DocumentText, RawPage
from .reconstructor import DocumentReconstructor, build_linear_document
from .sources import extract_pdfminer_pages, run_pdftohtml, run_pdftotext

log = logging.getLogger("pdfmd.api")


def parse_page_selection(pages_str: str) -> set | None:
    """Parses a page selection string (e.g., '1,3,5-7') into a set of integers."""
    if not pages_str or pages_str.lower() == "all":
        return None
    pages = set()
    try:
        for p in pages_str.split(","):
            part = p.strip()
            if "-" in part:
                s, e = map(int, part.split("-"))
                if s > e:
                    raise ValueError(f"reversed range {part}")
                pages.update(range(s, e + 1))
            else:
                pages.add(int(part))
        return pages
    except ValueError:
        log.error("Invalid page selection format: %s. Defaulting to 'all'.", pages_str)
        return None


def reconstruct_pages(pages: list[RawPage], classify=True) -> DocumentText:
    """Runs the layout reconstruction over already-decoded pages."""
    return DocumentReconstructor(classify=classify).build_document(pages)


def load_structural_pages(
    pdf_path: str,
    engine: str = ENGINE_PDFTOHTML,
    timeout=DEFAULT_TOOL_TIMEOUT,
    pages_to_process=None,
) -> list[RawPage]:
    """Produces positioned-run pages for a PDF with the chosen engine."""
    if engine == ENGINE_PDFTOHTML:
        return run_pdftohtml(pdf_path, timeout=timeout)
    if engine == ENGINE_PDFMINER:
        return extract_pdfminer_pages(pdf_path, pages_to_process=pages_to_process)
    raise ValueError(f"Unknown engine '{engine}'. Choose from {ENGINES}.")


def process_pdf_text(
    pdf_path: str,
    mode: str = MODE_SEMANTIC,
    engine: str = ENGINE_PDFTOHTML,
    timeout=DEFAULT_TOOL_TIMEOUT,
    pages_str: str = "all",
    classify=True,
) -> DocumentText:
    """
    Extracts readable text from a PDF, either by structural reconstruction
    ('semantic') or by splitting pdftotext's linearized output.
    """
    if not os.path.exists(pdf_path):
        raise FileNotFoundError(f"PDF not found: {pdf_path}")
    if mode not in MODES:
        raise ValueError(f"Unknown mode '{mode}'. Choose from {MODES}.")

    pages_to_process = parse_page_selection(pages_str)
    if mode == MODE_SEMANTIC:
        pages = load_structural_pages(
            pdf_path, engine=engine, timeout=timeout, pages_to_process=pages_to_process
        )
        if pages_to_process:
            pages = [p for p in pages if p.number in pages_to_process]
        document = reconstruct_pages(pages, classify=classify)
    else:
        text = run_pdftotext(pdf_path, mode=mode, timeout=timeout)
        document = build_linear_document(
            text, mode, classify=classify, pages_to_process=pages_to_process
        )

    log.info(
        "Extracted %d page(s), %d line(s), %d char(s) from %s",
        document.stats.pages,
        document.stats.lines,
        document.stats.chars,
        pdf_path,
    )
    return document
