"""
Error mapping utilities for the streaming transport.

Converts httpx exceptions, HTTP error responses and in-stream error frames
into ProviderError instances with consistent metadata.
"""

from typing import Any, Mapping, Optional, Tuple
import httpx

from .base import ProviderError
from ..config.constants import PROVIDER_NAME


class ErrorMapper:
    """Maps transport-level failures to standardized ProviderError."""

    # Common HTTP status codes that indicate retryable errors
    RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

    # Service error codes that indicate throttling
    THROTTLING_CODES = {"Throttling", "Throttling.RateQuota", "Throttling.AllocationQuota"}

    @staticmethod
    def is_retryable(error: BaseException) -> bool:
        """
        Determine if an error is retryable.

        Args:
            error: The exception to check

        Returns:
            bool: True if the error is retryable
        """
        status_code = getattr(error, 'status_code', None)
        if status_code is not None and status_code in ErrorMapper.RETRYABLE_STATUS_CODES:
            return True

        code = getattr(error, 'code', None)
        if isinstance(code, str) and code in ErrorMapper.THROTTLING_CODES:
            return True

        if isinstance(error, (httpx.TimeoutException, httpx.ConnectError, httpx.RemoteProtocolError)):
            return True

        error_msg = str(error).lower()
        if any(phrase in error_msg for phrase in ['rate limit', 'too many requests', 'quota exceeded']):
            return True

        return False

    @staticmethod
    def _describe(payload: Any) -> Tuple[Optional[str], Optional[str], Optional[str]]:
        """Pull (code, message, request_id) out of a service error payload."""
        if not isinstance(payload, Mapping):
            return None, None, None
        code = payload.get("code")
        message = payload.get("message")
        request_id = payload.get("request_id")
        return (
            code if isinstance(code, str) else None,
            message if isinstance(message, str) else None,
            request_id if isinstance(request_id, str) else None,
        )

    @staticmethod
    def map_http_error(status_code: int, payload: Any = None, text: str = "") -> ProviderError:
        """
        Map a non-2xx HTTP response to ProviderError.

        Args:
            status_code: HTTP status of the response
            payload: JSON-decoded response body, if it decoded
            text: Raw response body used when there is no structured message

        Returns:
            ProviderError with status, code and request id populated
        """
        code, message, request_id = ErrorMapper._describe(payload)
        detail = message or text.strip() or httpx.codes.get_reason_phrase(status_code) or "request failed"
        label = f"{code}: {detail}" if code else detail

        error = ProviderError(
            message=f"DashScope API error ({status_code}): {label}",
            provider=PROVIDER_NAME,
            status_code=status_code,
            code=code,
            request_id=request_id
        )
        error.is_retryable = ErrorMapper.is_retryable(error)
        return error

    @staticmethod
    def map_stream_error(payload: Any, status_code: Optional[int] = None) -> ProviderError:
        """Map an ``event: error`` frame received mid-stream."""
        code, message, request_id = ErrorMapper._describe(payload)
        detail = message or "stream reported an error"
        label = f"{code}: {detail}" if code else detail

        error = ProviderError(
            message=f"DashScope stream error: {label}",
            provider=PROVIDER_NAME,
            status_code=status_code,
            code=code,
            request_id=request_id
        )
        error.is_retryable = ErrorMapper.is_retryable(error)
        return error

    @staticmethod
    def map_transport_error(error: httpx.HTTPError) -> ProviderError:
        """
        Map an httpx exception (connect failure, timeout, protocol error).

        Args:
            error: The httpx exception

        Returns:
            ProviderError wrapping the original exception
        """
        if isinstance(error, httpx.TimeoutException):
            message = f"DashScope connection timed out: {error}"
        elif isinstance(error, httpx.ConnectError):
            message = f"DashScope connection failed: {error}"
        else:
            message = f"DashScope transport error: {error}"

        provider_error = ProviderError(message=message, provider=PROVIDER_NAME)
        provider_error.is_retryable = ErrorMapper.is_retryable(error)
        provider_error.original_error = error
        return provider_error
