# --- pdfmd_lib/renderer.py ---
"""
pdfmd_lib/renderer.py: Renders a DocumentText as Markdown, plain text, or a
terminal summary.
"""
import logging

from rich.table import Table

from .classifier import BlockClassifier
from .constants import KIND_HEADING, KIND_LIST_ITEM
from .models import Block, DocumentText, PageText

log_render = logging.getLogger("pdfmd.render")

PAGE_RULE = "\n\n---\n\n"


def render_block(block: Block) -> str:
    """Formats one classified block as Markdown."""
    if block.kind == KIND_HEADING:
        return f"## {block.text}"
    if block.kind == KIND_LIST_ITEM:
        return f"- {block.text}"
    return block.text


def render_page_markdown(page: PageText, classifier=None) -> str:
    """Formats one page; naive pages keep their layout in a fenced block."""
    if not page.structural:
        return f"```text\n{page.text}\n```" if page.text else ""
    blocks = page.blocks
    if blocks is None:
        blocks = (classifier or BlockClassifier()).classify_page(page.text)
    return "\n\n".join(render_block(b) for b in blocks)


def render_markdown(document: DocumentText, title: str | None = None) -> str:
    """Renders the whole document as Markdown, pages split by a rule."""
    classifier = BlockClassifier()
    pages = [render_page_markdown(p, classifier) for p in document.pages]
    body = PAGE_RULE.join(p for p in pages if p)
    log_render.debug("Rendered %d page(s) to %d Markdown chars.", len(pages), len(body))
    if title:
        return f"# {title}\n\n{body}\n" if body else f"# {title}\n"
    return f"{body}\n" if body else ""


def render_text(document: DocumentText) -> str:
    """Renders plain page texts separated by form feeds."""
    return document.get_text(separator="\n\f\n") + "\n"


def render_summary(document: DocumentText, title: str = "Extraction summary") -> Table:
    """Builds a rich Table with the document's aggregate statistics."""
    table = Table(title=title)
    table.add_column("Mode")
    table.add_column("Pages", justify="right")
    table.add_column("Lines", justify="right")
    table.add_column("Chars", justify="right")
    stats = document.stats
    table.add_row(document.mode, str(stats.pages), str(stats.lines), str(stats.chars))
    return table
