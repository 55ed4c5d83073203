from fastapi import status
from typing import Any, Dict, List, Optional


class APIException(Exception):
    """
    Base exception for API errors.

    All custom exceptions should inherit from this class. The rendered
    response body is always ``{"error": <detail>}`` plus any extra fields.
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        code: str = "internal_error",
        context: Optional[Dict[str, Any]] = None,
        extra_body: Optional[Dict[str, Any]] = None
    ):
        self.status_code = status_code
        self.detail = detail
        self.code = code
        self.context = context or {}
        self.extra_body = extra_body or {}
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for consistent response format."""
        body: Dict[str, Any] = {"error": self.detail}
        body.update(self.extra_body)
        return body


class BadRequestError(APIException):
    """Raised when the lookup request is missing a usable barcode."""

    def __init__(
        self,
        detail: str = "Barcode is required",
        code: str = "bad_request",
        status_code: int = status.HTTP_400_BAD_REQUEST,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, code=code, context=context)


class MethodNotAllowedError(APIException):
    """Raised for any HTTP method other than the allowed ones."""

    def __init__(self, allowed_methods: Optional[List[str]] = None):
        allowed = allowed_methods or ["POST"]
        self.allowed_methods = allowed
        super().__init__(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            detail="Method not allowed",
            code="method_not_allowed",
            extra_body={"allowedMethods": allowed}
        )


class IntegrationException(APIException):
    """Exception raised when an external API integration fails."""

    def __init__(
        self,
        detail: str = "External API integration error",
        code: str = "integration_error",
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(status_code=status_code, detail=detail, code=code, context=context)
        self.original_exception = original_exception

        if original_exception and self.context is not None:
            self.context["original_error"] = str(original_exception)


class ProviderError(IntegrationException):
    """
    A single lookup provider failed.

    Covers non-success HTTP statuses, transport failures and bodies that do
    not match the provider's expected shape.
    """

    def __init__(
        self,
        provider: str,
        detail: str,
        provider_status: Optional[int] = None,
        original_exception: Optional[Exception] = None
    ):
        self.provider = provider
        self.provider_status = provider_status
        self.reason = detail
        message = f"Status: {provider_status}, {detail}" if provider_status is not None else detail
        super().__init__(
            detail=message,
            code="provider_error",
            context={"provider": provider, "provider_status": provider_status},
            original_exception=original_exception
        )


class AggregateLookupError(IntegrationException):
    """Both the primary and the secondary provider failed for one lookup."""

    def __init__(self, primary_error: ProviderError, secondary_error: ProviderError):
        self.primary_error = primary_error
        self.secondary_error = secondary_error
        detail = (
            f"Both APIs failed. Primary ({primary_error.provider}): {primary_error.detail}, "
            f"Secondary ({secondary_error.provider}): {secondary_error.detail}"
        )
        super().__init__(
            detail=detail,
            code="aggregate_lookup_error",
            context={
                "primary": primary_error.context,
                "secondary": secondary_error.context,
            }
        )


class LookupCancelledError(APIException):
    """The lookup did not finish before its deadline."""

    def __init__(self, barcode: str, deadline: Optional[float] = None):
        self.barcode = barcode
        self.deadline = deadline
        detail = f"Lookup for barcode '{barcode}' was cancelled"
        if deadline is not None:
            detail += f" after {deadline:g}s deadline"
        super().__init__(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail=detail,
            code="lookup_cancelled",
            context={"deadline": deadline}
        )


class ProviderNotFoundError(Exception):
    """Raised when a provider type is not registered."""


class ProviderConfigError(Exception):
    """Raised when a provider cannot be built from its configuration."""
