"""
Custom Exception Classes for the Placement ATS Engine

The engine itself reports "not found" and ineligibility as values. Exceptions
are reserved for programming contract violations and for the document
boundary (unreadable uploads).
"""
from typing import Dict, Any
from fastapi import HTTPException


class PlacementATSError(Exception):
    """Base exception for the engine"""

    def __init__(
        self,
        message: str,
        error_code: str = None,
        details: Dict[str, Any] = None,
        cause: Exception = None
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/response"""
        result = {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class ContractViolationError(PlacementATSError):
    """Raised when a caller passes input the engine cannot accept (e.g. None)"""

    def __init__(self, message: str, argument: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if argument:
            details['argument'] = argument
        super().__init__(message, error_code="CONTRACT_VIOLATION", details=details, **kwargs)


class DocumentExtractionError(PlacementATSError):
    """Raised when an uploaded document yields no usable text"""

    def __init__(self, message: str, filename: str = None, status_code: int = 400, **kwargs):
        details = kwargs.pop('details', {})
        if filename:
            details['filename'] = filename
        self.status_code = status_code
        super().__init__(message, error_code="DOCUMENT_EXTRACTION_ERROR", details=details, **kwargs)


class ConfigurationError(PlacementATSError):
    """Raised when vocabulary or branch configuration is invalid"""

    def __init__(self, message: str, config_key: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if config_key:
            details['config_key'] = config_key
        super().__init__(message, error_code="CONFIGURATION_ERROR", details=details, **kwargs)


def require(condition: bool, message: str, argument: str = None) -> None:
    """Fail fast on a broken caller contract."""
    if not condition:
        raise ContractViolationError(message, argument=argument)


# HTTP Exception Mapping
def map_to_http_exception(exc: PlacementATSError) -> HTTPException:
    """Map engine exceptions to HTTP exceptions"""

    status_code_mapping = {
        ContractViolationError: 400,
        ConfigurationError: 500,
    }

    if isinstance(exc, DocumentExtractionError):
        status_code = exc.status_code
    else:
        status_code = status_code_mapping.get(type(exc), 500)

    detail = {
        "error": exc.to_dict(),
        "message": exc.message
    }

    return HTTPException(status_code=status_code, detail=detail)
