"""Plain text extraction from the card PDFs."""

import fitz  # PyMuPDF


def page_text(doc, page_no: int) -> str:
    """Plain text of one page (0-based), in content stream order."""
    return doc[page_no].get_text("text")


def pdf_to_text(pdf_path: str) -> str:
    """Text of every page, each followed by a newline."""
    doc = fitz.open(pdf_path)
    parts = []
    for page_no in range(doc.page_count):
        parts.append(page_text(doc, page_no))
        parts.append('\n')
    doc.close()
    return ''.join(parts)
