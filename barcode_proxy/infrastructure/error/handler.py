"""
Error handling module for the Barcode Lookup Proxy.
Categorizes provider failures and logs them with structured fields.
"""
import logging
from typing import Any, Dict, Optional
from enum import Enum
from datetime import datetime, timezone

import httpx
from pydantic import BaseModel, Field

from barcode_proxy.core.exceptions import ProviderError


class ErrorCategory(str, Enum):
    """Categorization of errors for processing and reporting."""
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    CONNECTION = "connection"
    TIMEOUT = "timeout"
    NOT_FOUND = "not_found"
    PARSE = "parse"
    EXTERNAL_API = "external_api"
    UNKNOWN = "unknown"


class ErrorSeverity(str, Enum):
    """Severity levels for errors."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ErrorDetails(BaseModel):
    """Structured error details for consistency in logging and reporting."""
    timestamp: datetime
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    source: str
    http_status_code: Optional[int] = None
    context: Dict[str, Any] = Field(default_factory=dict)


class ErrorHandler:
    """
    Central error processing for provider failures: categorization and
    logging at a level matching the severity.
    """

    def __init__(self, logger: logging.Logger):
        """
        Initialize the error handler.

        Args:
            logger: Logger instance for error logging
        """
        self.logger = logger

    def handle_error(
        self,
        exception: Exception,
        source: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> ErrorDetails:
        """
        Categorize and log an error.

        Args:
            exception: The exception that occurred
            source: Source identifier (e.g., "barcodelookup")
            context: Additional context about the error

        Returns:
            ErrorDetails: Structured details about the error
        """
        error_details = self.categorize_error(exception, source, context or {})
        self.log_error(error_details)
        return error_details

    def categorize_error(
        self,
        exception: Exception,
        source: str,
        context: Dict[str, Any],
    ) -> ErrorDetails:
        """
        Categorize an error based on the exception and its HTTP status.

        Args:
            exception: The exception that occurred
            source: Source identifier
            context: Additional context about the error

        Returns:
            ErrorDetails: Structured details about the error
        """
        category = ErrorCategory.UNKNOWN
        severity = ErrorSeverity.MEDIUM
        http_status_code = None

        if isinstance(exception, ProviderError):
            http_status_code = exception.provider_status
            original = exception.original_exception

            if http_status_code is None:
                if isinstance(original, httpx.TimeoutException):
                    category = ErrorCategory.TIMEOUT
                elif isinstance(original, httpx.RequestError):
                    category = ErrorCategory.CONNECTION
            elif http_status_code < 400:
                # a success status whose body could not be used
                category = ErrorCategory.PARSE
                severity = ErrorSeverity.HIGH
            elif http_status_code == 404:
                category = ErrorCategory.NOT_FOUND
                severity = ErrorSeverity.LOW
            elif http_status_code == 429:
                category = ErrorCategory.RATE_LIMIT
            elif http_status_code in (401, 403):
                category = ErrorCategory.AUTHENTICATION
                severity = ErrorSeverity.HIGH
            elif http_status_code >= 500:
                category = ErrorCategory.EXTERNAL_API
                severity = ErrorSeverity.HIGH
            else:
                category = ErrorCategory.EXTERNAL_API

        return ErrorDetails(
            timestamp=datetime.now(timezone.utc),
            category=category,
            severity=severity,
            message=str(exception),
            source=source,
            http_status_code=http_status_code,
            context=context,
        )

    def log_error(self, error_details: ErrorDetails) -> None:
        """
        Log error details at the appropriate level.

        Args:
            error_details: Structured error information
        """
        log_data = {
            "category": error_details.category.value,
            "severity": error_details.severity.value,
            "source": error_details.source,
        }

        if error_details.http_status_code:
            log_data["http_status_code"] = error_details.http_status_code

        if error_details.context:
            log_data["context"] = error_details.context

        message = f"{error_details.source} failed: {error_details.message}"
        if error_details.severity == ErrorSeverity.HIGH:
            self.logger.error(message, extra={"data": log_data})
        elif error_details.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(message, extra={"data": log_data})
        else:
            self.logger.info(message, extra={"data": log_data})
