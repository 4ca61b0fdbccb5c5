"""Unit tests for session logger setup."""

import pytest
from loguru import logger

from tailorfit.utils.logger import setup_logger


@pytest.mark.unit
def test_setup_logger_writes_provenance_header(tmp_path, monkeypatch):
    """Test that a session log starts with the context, library and style provenance."""
    monkeypatch.setenv("TAILORFIT_STYLE_CONFIG", "configs/compact.yaml")

    log_file = setup_logger("render", tmp_path / "session", {"Output format": "pdf"})
    logger.debug("[render] planned 1 page")
    logger.remove()

    assert log_file == tmp_path / "session" / "render.log"
    content = log_file.read_text()
    assert "tailorfit session: render" in content
    assert "Libraries: tailorfit " in content
    assert "python-docx" in content
    assert "Style config: configs/compact.yaml" in content
    assert "Output format: pdf" in content
    assert "[render] planned 1 page" in content


@pytest.mark.unit
def test_setup_logger_reports_default_styles(tmp_path, monkeypatch):
    """Test that the header names the built-in style table when no override is configured."""
    monkeypatch.delenv("TAILORFIT_STYLE_CONFIG", raising=False)

    log_file = setup_logger("fit", tmp_path, {"Line budget": 58})
    logger.remove()

    content = log_file.read_text()
    assert "Style config: built-in defaults" in content
    assert "Line budget: 58" in content
