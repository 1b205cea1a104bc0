"""Tests for the HTTP merge service and its configuration."""

from __future__ import annotations

import io

import pikepdf
import pytest
from fastapi.testclient import TestClient

from pdf_sidebyside.service import MERGE_PATH, ServiceConfig, create_app


def _files(first: bytes | None, second: bytes | None, media_type="application/pdf"):
    files = {}
    if first is not None:
        files["pdf1"] = ("english.pdf", first, media_type)
    if second is not None:
        files["pdf2"] = ("german.pdf", second, media_type)
    return files


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(ServiceConfig()))


# ---------------------------------------------------------------------------
# ServiceConfig
# ---------------------------------------------------------------------------


class TestServiceConfig:
    def test_from_env_defaults(self, monkeypatch):
        for name in (
            "SIDEBYSIDE_HOST",
            "SIDEBYSIDE_PORT",
            "SIDEBYSIDE_MAX_UPLOAD_MB",
            "SIDEBYSIDE_OUTPUT_FILENAME",
            "SIDEBYSIDE_LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)
        config = ServiceConfig.from_env()
        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.max_upload_bytes == 10 * 1024 * 1024
        assert config.output_filename == "merged_translation.pdf"
        assert config.log_level == "INFO"
        assert config.accepted_media_types == ("application/pdf",)

    def test_from_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SIDEBYSIDE_HOST", "0.0.0.0")
        monkeypatch.setenv("SIDEBYSIDE_PORT", "9000")
        monkeypatch.setenv("SIDEBYSIDE_MAX_UPLOAD_MB", "25")
        monkeypatch.setenv("SIDEBYSIDE_OUTPUT_FILENAME", "pairs.pdf")
        monkeypatch.setenv("SIDEBYSIDE_LOG_LEVEL", "debug")
        config = ServiceConfig.from_env()
        assert config.host == "0.0.0.0"
        assert config.port == 9000
        assert config.max_upload_bytes == 25 * 1024 * 1024
        assert config.output_filename == "pairs.pdf"
        assert config.log_level == "DEBUG"

    def test_invalid_port(self, monkeypatch):
        monkeypatch.setenv("SIDEBYSIDE_PORT", "eighty")
        with pytest.raises(ValueError, match="SIDEBYSIDE_PORT"):
            ServiceConfig.from_env()

    def test_non_positive_upload_limit(self, monkeypatch):
        monkeypatch.setenv("SIDEBYSIDE_MAX_UPLOAD_MB", "0")
        with pytest.raises(ValueError, match="positive"):
            ServiceConfig.from_env()

    def test_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("SIDEBYSIDE_LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError, match="log level"):
            ServiceConfig.from_env()


# ---------------------------------------------------------------------------
# POST /api/merge-pdfs
# ---------------------------------------------------------------------------


class TestMergeEndpoint:
    def test_success(self, client, a4_pdf, letter_pdf):
        resp = client.post(MERGE_PATH, files=_files(a4_pdf, letter_pdf))
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert (
            resp.headers["content-disposition"]
            == 'attachment; filename="merged_translation.pdf"'
        )
        with pikepdf.open(io.BytesIO(resp.content)) as pdf:
            assert len(pdf.pages) == 1

    def test_custom_output_filename(self, a4_pdf):
        client = TestClient(create_app(ServiceConfig(output_filename="pairs.pdf")))
        resp = client.post(MERGE_PATH, files=_files(a4_pdf, a4_pdf))
        assert 'filename="pairs.pdf"' in resp.headers["content-disposition"]

    def test_truncates_to_shorter_document(self, client, multipage_pdf, a4_pdf):
        resp = client.post(MERGE_PATH, files=_files(multipage_pdf, a4_pdf))
        assert resp.status_code == 200
        with pikepdf.open(io.BytesIO(resp.content)) as pdf:
            assert len(pdf.pages) == 1

    def test_missing_second_file(self, client, a4_pdf):
        resp = client.post(MERGE_PATH, files=_files(a4_pdf, None))
        assert resp.status_code == 400
        assert resp.json() == {
            "error": "Please upload both PDF files",
            "category": "missing_input",
        }

    def test_empty_upload_counts_as_missing(self, client, a4_pdf):
        resp = client.post(MERGE_PATH, files=_files(a4_pdf, b""))
        assert resp.status_code == 400
        assert resp.json()["category"] == "missing_input"

    def test_wrong_media_type(self, client, a4_pdf):
        resp = client.post(
            MERGE_PATH, files=_files(a4_pdf, b"hello", media_type="text/plain")
        )
        assert resp.status_code == 415
        assert resp.json()["category"] == "invalid_input"

    def test_upload_too_large(self, a4_pdf):
        client = TestClient(create_app(ServiceConfig(max_upload_bytes=64)))
        resp = client.post(MERGE_PATH, files=_files(a4_pdf, a4_pdf))
        assert resp.status_code == 413
        assert resp.json()["category"] == "invalid_input"

    def test_non_pdf_is_processing_failure(self, client, a4_pdf):
        resp = client.post(MERGE_PATH, files=_files(b"plain text, not a pdf", a4_pdf))
        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "Failed to merge PDFs"
        assert body["category"] == "processing_failure"
        assert body["detail"]

    def test_zero_page_input_returns_empty_pdf(self, client, empty_pdf, a4_pdf):
        resp = client.post(MERGE_PATH, files=_files(empty_pdf, a4_pdf))
        assert resp.status_code == 200
        with pikepdf.open(io.BytesIO(resp.content)) as pdf:
            assert len(pdf.pages) == 0

    def test_failure_is_logged(self, client, a4_pdf, caplog):
        with caplog.at_level("ERROR", logger="pdf_sidebyside.service"):
            client.post(MERGE_PATH, files=_files(b"garbage", a4_pdf))
        assert "Error merging PDFs" in caplog.text


class TestHealth:
    def test_ok(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}
