#!/usr/bin/env python3
"""Integration check script for a running merge service.

Validates the HTTP contract against a live instance. Non-destructive:
the service keeps no state.

Usage::

    SIDEBYSIDE_URL=http://localhost:8000 python scripts/check_service.py
"""

from __future__ import annotations

import io
import os
import sys

import pikepdf

from pdf_sidebyside.client import SideBySideClient
from pdf_sidebyside.exceptions import ServiceAPIError, ServiceConnectionError


def make_pdf(width: float, height: float, pages: int) -> bytes:
    pdf = pikepdf.new()
    for _ in range(pages):
        pdf.add_blank_page(page_size=(width, height))
    buf = io.BytesIO()
    pdf.save(buf)
    return buf.getvalue()


def run_checks() -> None:
    base_url = os.environ.get("SIDEBYSIDE_URL", "http://localhost:8000")

    passed = 0
    failed = 0

    def report(name: str, ok: bool, detail: str = "") -> None:
        nonlocal passed, failed
        status = "PASS" if ok else "FAIL"
        suffix = f" — {detail}" if detail else ""
        print(f"  [{status}] {name}{suffix}")
        if ok:
            passed += 1
        else:
            failed += 1

    print("\nMerge service integration checks")
    print(f"  URL: {base_url}")
    print()

    client = SideBySideClient(base_url)

    # -- Check 1: Health --------------------------------------------------
    try:
        report("1. Health", client.health().get("status") == "ok")
    except ServiceConnectionError as exc:
        report("1. Health", False, str(exc))
        print("\nCannot connect. Exiting.")
        sys.exit(1)

    # -- Check 2: Merge with uneven page counts ---------------------------
    try:
        merged = client.compose(make_pdf(100, 200, 3), make_pdf(300, 100, 2))
        with pikepdf.open(io.BytesIO(merged)) as pdf:
            count = len(pdf.pages)
            box = pdf.pages[0].mediabox
            size = (float(box[2]), float(box[3]))
        ok = count == 2 and size == (400.0, 200.0)
        report("2. Merge", ok, f"pages={count}, size={size[0]:g}x{size[1]:g}")
    except Exception as exc:
        report("2. Merge", False, str(exc))

    # -- Check 3: Garbage input is a processing failure -------------------
    try:
        client.compose(b"not a pdf", make_pdf(100, 100, 1))
        report("3. Invalid PDF", False, "request unexpectedly succeeded")
    except ServiceAPIError as exc:
        ok = exc.status_code == 500 and exc.category == "processing_failure"
        report("3. Invalid PDF", ok, f"status={exc.status_code}")
    except Exception as exc:
        report("3. Invalid PDF", False, str(exc))

    # -- Summary ----------------------------------------------------------
    total = passed + failed
    print(f"\n  {passed} passed, {failed} failed, {total} total\n")

    client.close()
    sys.exit(1 if failed > 0 else 0)


if __name__ == "__main__":
    run_checks()
