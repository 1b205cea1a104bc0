"""HTTP service that collects two uploads and returns the side-by-side PDF."""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.responses import JSONResponse, Response

from pdf_sidebyside.composer import compose
from pdf_sidebyside.exceptions import (
    InputError,
    MissingInputError,
    ProcessingError,
    UnsupportedMediaTypeError,
    UploadTooLargeError,
)

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
MERGE_PATH = "/api/merge-pdfs"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
DEFAULT_MAX_UPLOAD_MB = 10
DEFAULT_OUTPUT_FILENAME = "merged_translation.pdf"
DEFAULT_LOG_LEVEL = "INFO"

_MISSING_MESSAGE = "Please upload both PDF files"
_FAILURE_MESSAGE = "Failed to merge PDFs"


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, str(default))
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@dataclass
class ServiceConfig:
    """Runtime configuration for the merge service."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_MB * 1024 * 1024
    output_filename: str = DEFAULT_OUTPUT_FILENAME
    log_level: str = DEFAULT_LOG_LEVEL
    accepted_media_types: tuple[str, ...] = field(
        default_factory=lambda: (PDF_MEDIA_TYPE,)
    )

    @classmethod
    def from_env(cls) -> ServiceConfig:
        """Build configuration from environment variables."""
        host = os.environ.get("SIDEBYSIDE_HOST", DEFAULT_HOST)
        port = _int_env("SIDEBYSIDE_PORT", DEFAULT_PORT)
        max_upload_mb = _int_env("SIDEBYSIDE_MAX_UPLOAD_MB", DEFAULT_MAX_UPLOAD_MB)
        if max_upload_mb <= 0:
            raise ValueError("SIDEBYSIDE_MAX_UPLOAD_MB must be positive")

        output_filename = os.environ.get(
            "SIDEBYSIDE_OUTPUT_FILENAME", DEFAULT_OUTPUT_FILENAME
        )
        if not output_filename:
            raise ValueError("SIDEBYSIDE_OUTPUT_FILENAME must not be empty")

        log_level = os.environ.get("SIDEBYSIDE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if log_level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {log_level}")

        return cls(
            host=host,
            port=port,
            max_upload_bytes=max_upload_mb * 1024 * 1024,
            output_filename=output_filename,
            log_level=log_level,
        )


def _read_upload(upload: UploadFile, config: ServiceConfig) -> bytes:
    """Validate one upload and return its bytes."""
    name = upload.filename or "upload"

    # One byte past the limit is enough to detect an oversize upload.
    data = upload.file.read(config.max_upload_bytes + 1)
    if not data:
        raise MissingInputError(f"{name} is empty")
    if len(data) > config.max_upload_bytes:
        raise UploadTooLargeError(
            f"{name} exceeds {config.max_upload_bytes // (1024 * 1024)}MB"
        )

    media_type = (upload.content_type or "").split(";")[0].strip().lower()
    if media_type not in config.accepted_media_types:
        raise UnsupportedMediaTypeError(
            f"{name} is not a PDF ({media_type or 'no content type'})"
        )
    return data


def _error_status(exc: InputError) -> int:
    if isinstance(exc, UnsupportedMediaTypeError):
        return 415
    if isinstance(exc, UploadTooLargeError):
        return 413
    return 400


def create_app(config: ServiceConfig | None = None) -> FastAPI:
    """Build the FastAPI application for the given configuration."""
    config = config or ServiceConfig()

    app = FastAPI(
        title="pdf-sidebyside",
        description="Combine two PDFs into side-by-side page pairs",
    )

    @app.exception_handler(InputError)
    async def input_error_handler(request: Request, exc: InputError) -> JSONResponse:
        logger.warning("Rejected merge request: %s", exc)
        message = _MISSING_MESSAGE if isinstance(exc, MissingInputError) else str(exc)
        return JSONResponse(
            status_code=_error_status(exc),
            content={"error": message, "category": exc.category},
        )

    @app.exception_handler(ProcessingError)
    async def processing_error_handler(
        request: Request, exc: ProcessingError
    ) -> JSONResponse:
        logger.error("Error merging PDFs: %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": _FAILURE_MESSAGE,
                "detail": str(exc),
                "category": exc.category,
            },
        )

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    # Sync handler: FastAPI runs it in its worker thread pool, one request
    # per thread.
    @app.post(MERGE_PATH)
    def merge_pdfs(
        pdf1: UploadFile | None = File(None),
        pdf2: UploadFile | None = File(None),
    ) -> Response:
        if pdf1 is None or pdf2 is None:
            raise MissingInputError(_MISSING_MESSAGE)

        first = _read_upload(pdf1, config)
        second = _read_upload(pdf2, config)

        start_time = time.monotonic()
        merged = compose(first, second)
        elapsed_ms = int((time.monotonic() - start_time) * 1000)

        logger.info(
            "Merged %s (%d bytes) + %s (%d bytes) -> %d bytes in %dms",
            pdf1.filename,
            len(first),
            pdf2.filename,
            len(second),
            len(merged),
            elapsed_ms,
        )

        return Response(
            content=merged,
            media_type=PDF_MEDIA_TYPE,
            headers={
                "Content-Disposition": (
                    f'attachment; filename="{config.output_filename}"'
                ),
            },
        )

    return app


def run_service(config: ServiceConfig) -> None:
    """Serve the merge API with uvicorn until interrupted."""
    import uvicorn

    logger.info("Starting merge service on %s:%d", config.host, config.port)
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
