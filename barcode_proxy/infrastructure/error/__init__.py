"""
Error handling package for the Barcode Lookup Proxy.
Provides categorization and structured logging of provider failures.
"""

from barcode_proxy.infrastructure.error.handler import (
    ErrorHandler,
    ErrorDetails,
    ErrorCategory,
    ErrorSeverity
)

__all__ = [
    "ErrorHandler",
    "ErrorDetails",
    "ErrorCategory",
    "ErrorSeverity",
]
