import logging

import pytest
from pydantic import ValidationError

from placement_ats.core.config import Settings, get_settings
from placement_ats.core.exceptions import (
    ConfigurationError,
    ContractViolationError,
    DocumentExtractionError,
    PlacementATSError,
    map_to_http_exception,
    require
)
from placement_ats.core.logging_config import PerformanceMonitor, get_logger


class TestSettings:
    """Test cases for configuration"""

    def test_defaults(self):
        """Test default weights and limits"""
        settings = Settings()

        assert (settings.skills_weight, settings.completeness_weight, settings.academic_weight) == (0.5, 0.2, 0.3)
        assert settings.neutral_skills_score == 70
        assert settings.min_resume_text_length == 50
        assert settings.max_upload_size_bytes == 5 * 1024 * 1024

    def test_weights_must_sum_to_one(self):
        """Test inconsistent weights are rejected"""
        with pytest.raises(ValidationError):
            Settings(skills_weight=0.6)

    def test_env_override(self, monkeypatch):
        """Test ATS_ prefixed environment variables are read"""
        monkeypatch.setenv("ATS_NEUTRAL_SKILLS_SCORE", "55")

        assert Settings().neutral_skills_score == 55

    def test_get_settings_cached(self):
        """Test settings are built once"""
        assert get_settings() is get_settings()


class TestExceptions:
    """Test cases for engine exceptions"""

    def test_require_passes(self):
        """Test a true condition is silent"""
        require(True, "never raised")

    def test_require_raises(self):
        """Test a false condition raises a contract violation"""
        with pytest.raises(ContractViolationError) as exc_info:
            require(False, "Profile is required", argument="profile")

        error = exc_info.value
        assert isinstance(error, PlacementATSError)
        assert error.error_code == "CONTRACT_VIOLATION"
        assert error.details == {"argument": "profile"}

    def test_to_dict(self):
        """Test serialized error shape"""
        cause = ValueError("bad zip")
        error = DocumentExtractionError("Error reading DOCX", filename="cv.docx", cause=cause)

        assert error.to_dict() == {
            "error_type": "DocumentExtractionError",
            "error_code": "DOCUMENT_EXTRACTION_ERROR",
            "message": "Error reading DOCX",
            "details": {"filename": "cv.docx"},
            "cause": "bad zip"
        }

    @pytest.mark.parametrize("error,status_code", [
        (ContractViolationError("bad input"), 400),
        (ConfigurationError("bad table"), 500),
        (DocumentExtractionError("unreadable"), 400),
        (DocumentExtractionError("too large", status_code=413), 413),
        (PlacementATSError("unknown"), 500),
    ])
    def test_map_to_http_exception(self, error, status_code):
        """Test exception type decides the HTTP status"""
        http_exc = map_to_http_exception(error)

        assert http_exc.status_code == status_code
        assert http_exc.detail["message"] == error.message


class TestLogging:
    """Test cases for logger naming and timing"""

    def test_get_logger_namespaced(self):
        """Test loggers live under the package namespace"""
        assert get_logger("services.extractors").name == "placement_ats.services.extractors"

    def test_get_logger_not_double_prefixed(self):
        """Test module names already in the namespace are kept"""
        assert get_logger("placement_ats.main").name == "placement_ats.main"

    def test_performance_monitor_reraises(self):
        """Test failures inside the block propagate"""
        with pytest.raises(RuntimeError):
            with PerformanceMonitor("failing op", logger=logging.getLogger("test")):
                raise RuntimeError("boom")
