#!/usr/bin/env python3
"""CLI script for visual verification of side-by-side composition.

Usage:
    # Two 3-page samples (A4 left, Letter right) and their merge
    python scripts/make_samples.py out/

    # Uneven page counts to check truncation
    python scripts/make_samples.py out/ --left-pages 5 --right-pages 2

    # Landscape right-hand document
    python scripts/make_samples.py out/ --right-size letter-landscape
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Allow running from project root without install
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from pdf_sidebyside.composer import compose, read_page_sizes

# Page sizes in points
PAGE_SIZES = {
    "a4": (595.28, 841.89),
    "letter": (612.0, 792.0),
    "letter-landscape": (792.0, 612.0),
    "a5": (419.53, 595.28),
}


def generate_sample_pdf(path: Path, title: str, page_size: str, pages: int) -> None:
    """Generate a sample PDF with a framed title on every page."""
    from reportlab.pdfgen import canvas

    w, h = PAGE_SIZES[page_size]
    c = canvas.Canvas(str(path), pagesize=(w, h))
    for i in range(1, pages + 1):
        # Frame makes the page boundary visible once embedded
        c.setLineWidth(2)
        c.rect(4, 4, w - 8, h - 8)
        c.setFont("Helvetica", 24)
        c.drawString(72, h - 72, f"{title} — page {i}")
        c.setFont("Helvetica", 12)
        c.drawString(
            72, h - 108,
            f"Page size: {page_size} ({w:.0f} x {h:.0f} pt)",
        )
        y = h - 150
        for line in range(1, 20):
            c.drawString(72, y, f"Line {line}: Lorem ipsum dolor sit amet.")
            y -= 18
            if y < 72:
                break
        c.showPage()
    c.save()
    print(f"Generated sample PDF: {path} ({pages} x {page_size})")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Side-by-side composition verification tool",
    )
    parser.add_argument("outdir", help="Directory for the generated PDFs")
    parser.add_argument(
        "--left-size", choices=sorted(PAGE_SIZES), default="a4",
    )
    parser.add_argument(
        "--right-size", choices=sorted(PAGE_SIZES), default="letter",
    )
    parser.add_argument("--left-pages", type=int, default=3)
    parser.add_argument("--right-pages", type=int, default=3)

    args = parser.parse_args()

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    left_path = outdir / "left.pdf"
    right_path = outdir / "right.pdf"
    generate_sample_pdf(left_path, "Original", args.left_size, args.left_pages)
    generate_sample_pdf(right_path, "Translation", args.right_size, args.right_pages)

    result = compose(left_path.read_bytes(), right_path.read_bytes())
    output_path = outdir / "merged_translation.pdf"
    output_path.write_bytes(result)

    sizes = read_page_sizes(result)
    print(f"Output: {output_path} ({len(result)} bytes, {len(sizes)} page(s))")
    for i, size in enumerate(sizes, start=1):
        print(f"  page {i}: {size.width:.2f} x {size.height:.2f} pt")


if __name__ == "__main__":
    main()
