"""Abstract base stamper for writing station numbers onto card PDFs."""

from abc import ABC, abstractmethod

import fitz  # PyMuPDF

from ..core.layout import FONT, Alignment, Anchor, text_width

BLACK = (0, 0, 0)


class BaseStamper(ABC):
    """Copy every page of a card PDF and draw station numbers on the copies.

    Slots are numbered across the whole document, page by page, so page n
    holds slots n * slots_per_page onwards.
    """

    slots_per_page: int = 1

    def stamp(self, input_path: str, output_path: str) -> int:
        """Write the stamped copy of input_path. Returns the page count."""
        src = fitz.open(input_path)
        out = fitz.open()
        for page_no in range(src.page_count):
            out.insert_pdf(src, from_page=page_no, to_page=page_no)
            self._stamp_page(out[out.page_count - 1], page_no * self.slots_per_page)
        page_count = out.page_count
        out.save(output_path)
        out.close()
        src.close()
        return page_count

    @abstractmethod
    def _stamp_page(self, page, first_slot: int):
        """Draw the stamps for slots first_slot .. first_slot + slots_per_page - 1."""
        pass


def draw_text(page, anchor: Anchor, text: str, fontsize: float):
    """Draw text at a bottom-left-origin anchor on a PyMuPDF page.

    Anchors are in unrotated user space, so the media box is used rather
    than page.rect, which reflects /Rotate.
    """
    x = anchor.x
    if anchor.alignment == Alignment.RIGHT:
        x -= text_width(text, fontsize)
    y = page.mediabox.height - anchor.y
    page.insert_text(fitz.Point(x, y), text,
                     fontname=FONT, fontsize=fontsize, color=BLACK)
