"""Side-by-side page composer — combines page pairs from two PDFs using pikepdf."""

from __future__ import annotations

import io

import pikepdf

from pdf_sidebyside.exceptions import ComposeError, MissingInputError, ParseError
from pdf_sidebyside.layout import PageSize, Placement, compute_pair_layout

_LEFT = pikepdf.Name("/PageA")
_RIGHT = pikepdf.Name("/PageB")


def _open_pdf(pdf_bytes: bytes, label: str) -> pikepdf.Pdf:
    """Open a PDF from memory, translating pikepdf errors into ParseError."""
    try:
        return pikepdf.open(io.BytesIO(pdf_bytes))
    except pikepdf.PasswordError as e:
        raise ParseError(f"{label} PDF is encrypted: {e}") from e
    except pikepdf.PdfError as e:
        raise ParseError(f"{label} PDF is invalid: {e}") from e


def _media_box(page: pikepdf.Page) -> tuple[float, float, float, float]:
    """Return the page's MediaBox normalized to ``(llx, lly, urx, ury)``."""
    box = page.mediabox
    x0, y0, x1, y1 = (float(box[i]) for i in range(4))
    return (min(x0, x1), min(y0, y1), max(x0, x1), max(y0, y1))


def _page_size(page: pikepdf.Page) -> PageSize:
    """Read the MediaBox of a page and return its size in points."""
    llx, lly, urx, ury = _media_box(page)
    return PageSize(width=urx - llx, height=ury - lly)


def read_page_sizes(pdf_bytes: bytes) -> list[PageSize]:
    """Return the size of every page in a PDF, in page order.

    Raises:
        ParseError: If the PDF cannot be read.
    """
    pdf = _open_pdf(pdf_bytes, "Input")
    try:
        with pdf:
            return [_page_size(page) for page in pdf.pages]
    except (pikepdf.PdfError, TypeError, ValueError, IndexError) as e:
        raise ParseError(f"Cannot read page sizes: {e}") from e


def _num(value: float) -> str:
    """Format a number for a content stream."""
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _place(
    merged: pikepdf.Pdf,
    target: pikepdf.Page,
    source: pikepdf.Page,
    placement: Placement,
    name: pikepdf.Name,
) -> None:
    """Embed *source* as a form XObject and draw it at *placement*.

    The form covers the full MediaBox and ignores ``/Rotate``, so the drawn
    area matches the slot sized from the MediaBox exactly.
    """
    llx, lly, urx, ury = _media_box(source)

    # Only this page's content and resources are copied into the output.
    formx = merged.copy_foreign(
        source.as_form_xobject(handle_transformations=False)
    )
    formx.BBox = pikepdf.Array([llx, lly, urx, ury])
    if pikepdf.Name.Matrix in formx:
        del formx[pikepdf.Name.Matrix]
    target.add_resource(formx, pikepdf.Name.XObject, name)

    tx = _num(placement.x - llx)
    ty = _num(placement.y - lly)
    cs = f"q\n1 0 0 1 {tx} {ty} cm\n{name} Do\nQ\n".encode("ascii")
    target.contents_add(cs)


def compose(pdf_a: bytes, pdf_b: bytes) -> bytes:
    """Combine same-index pages of two PDFs into single side-by-side pages.

    Page ``i`` of ``pdf_a`` is drawn on the left and page ``i`` of ``pdf_b``
    immediately to its right, both unscaled and top-aligned. The output has
    ``min(pages(a), pages(b))`` pages; extra pages of the longer document are
    dropped, and two documents without a matching page give an empty PDF.

    Args:
        pdf_a: Bytes of the document placed on the left.
        pdf_b: Bytes of the document placed on the right.

    Returns:
        Bytes of the merged PDF.

    Raises:
        MissingInputError: If either buffer is absent or empty.
        ParseError: If either buffer is not a readable PDF.
        ComposeError: If embedding the pages or saving the output fails.
    """
    if not pdf_a or not pdf_b:
        raise MissingInputError("Both PDF documents are required")

    with _open_pdf(pdf_a, "First") as doc_a, _open_pdf(pdf_b, "Second") as doc_b:
        try:
            merged = pikepdf.new()
            with merged:
                pair_count = min(len(doc_a.pages), len(doc_b.pages))
                for i in range(pair_count):
                    page_a = doc_a.pages[i]
                    page_b = doc_b.pages[i]
                    layout = compute_pair_layout(
                        _page_size(page_a), _page_size(page_b)
                    )

                    merged.add_blank_page(
                        page_size=(layout.width, layout.height)
                    )
                    out_page = merged.pages[-1]
                    _place(merged, out_page, page_a, layout.left, _LEFT)
                    _place(merged, out_page, page_b, layout.right, _RIGHT)

                # Source streams are read lazily, so save before closing inputs.
                buf = io.BytesIO()
                merged.save(buf, deterministic_id=True)
                return buf.getvalue()
        except (pikepdf.PdfError, TypeError, ValueError, IndexError) as e:
            raise ComposeError(f"Failed to compose PDFs: {e}") from e
