"""Entry point for ``python -m pdf_sidebyside``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pdf_sidebyside.composer import compose, read_page_sizes
from pdf_sidebyside.exceptions import SideBySideError
from pdf_sidebyside.service import ServiceConfig, run_service

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdf_sidebyside",
        description="Combine two PDFs into side-by-side page pairs.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_compose = sub.add_parser("compose", help="Merge two local PDF files")
    p_compose.add_argument("left", type=Path, help="PDF shown on the left")
    p_compose.add_argument("right", type=Path, help="PDF shown on the right")
    p_compose.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("merged_translation.pdf"),
        help="Output path (default: merged_translation.pdf)",
    )

    p_serve = sub.add_parser("serve", help="Run the HTTP merge service")
    p_serve.add_argument("--host", help="Bind address (overrides SIDEBYSIDE_HOST)")
    p_serve.add_argument(
        "--port", type=int, help="Bind port (overrides SIDEBYSIDE_PORT)"
    )
    return parser


def _compose_files(left: Path, right: Path, output: Path) -> int:
    try:
        merged = compose(left.read_bytes(), right.read_bytes())
        sizes = read_page_sizes(merged)
    except OSError as exc:
        logger.error("Cannot read input: %s", exc)
        return 1
    except SideBySideError as exc:
        logger.error("Merge failed: %s", exc)
        return 1

    output.write_bytes(merged)
    logger.info("Wrote %s: %d page(s)", output, len(sizes))
    for i, size in enumerate(sizes, start=1):
        logger.debug("  page %d: %.2f x %.2f pt", i, size.width, size.height)
    return 0


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)

    try:
        config = ServiceConfig.from_env()
    except ValueError as exc:
        logging.basicConfig(level=logging.INFO)
        logger.error("Configuration error: %s", exc)
        sys.exit(1)

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )

    if args.command == "compose":
        sys.exit(_compose_files(args.left, args.right, args.output))

    if args.host is not None:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    run_service(config)


if __name__ == "__main__":
    main()
