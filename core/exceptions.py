"""
Custom exceptions for chemical lookup and classification.
"""
from typing import Any, Dict, Optional


class ChemStorageException(Exception):
    """Base exception for all chemical storage service errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize exception.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(ChemStorageException):
    """Raised when configuration is invalid."""
    pass


class LLMError(ChemStorageException):
    """Raised when the Gemini API call fails."""
    pass


class ResponseParseError(LLMError):
    """Raised when the model response carries no text or the text is not JSON."""
    pass


class ResponseValidationError(LLMError):
    """Raised when the model JSON does not match the expected shape."""
    pass


class ChemicalNotFoundError(LLMError):
    """Raised when the model reports the CAS number as invalid or unknown."""
    pass
