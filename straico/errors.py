"""
Straico SDK - Error Classes

Error taxonomy for client setup, argument validation, transport,
decoding and service-reported failures.
"""

import json
from typing import Any, Dict, Optional


class StraicoError(Exception):
    """
    Base exception for the Straico SDK.

    All SDK errors inherit from this class.

    Attributes:
        message: Human-readable error message
        details: Additional error details
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"


class ConfigurationError(StraicoError):
    """
    The client is set up incorrectly.

    This error occurs when:
    - API key is empty or missing
    - Base URL is empty or missing
    - Timeout is not a positive number
    - Scheme and host cannot be derived from the base URL
    """


class ValidationError(StraicoError):
    """
    Operation arguments are invalid.

    Raised before any request is sent.

    Attributes:
        param: The parameter that caused the error
    """

    def __init__(
        self,
        message: str,
        param: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.param = param


class TransportError(StraicoError):
    """
    The request could not be completed.

    This error occurs when:
    - Network is unavailable
    - DNS resolution fails
    - Connection is refused
    - The configured timeout expires

    Attributes:
        cause: The underlying transport exception
        timed_out: Whether the failure was a timeout
        detail: Decoded (or raw) response body, if one was received
    """

    def __init__(
        self,
        message: str = "Request failed",
        cause: Optional[BaseException] = None,
        timed_out: bool = False,
        detail: Any = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.cause = cause
        self.timed_out = timed_out
        self.detail = detail


class DecodeError(StraicoError):
    """
    Response body is not valid JSON.

    Attributes:
        body_excerpt: Raw body, truncated to MAX_EXCERPT characters
        status_code: HTTP status code of the response
    """

    MAX_EXCERPT = 500

    def __init__(
        self,
        message: str,
        body_excerpt: str = "",
        status_code: Optional[int] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.body_excerpt = body_excerpt
        self.status_code = status_code

    @classmethod
    def from_body(
        cls,
        body: str,
        reason: str,
        status_code: Optional[int] = None
    ) -> "DecodeError":
        """Create an error carrying a truncated excerpt of the raw body."""
        if len(body) > cls.MAX_EXCERPT:
            excerpt = body[:cls.MAX_EXCERPT] + "..."
        else:
            excerpt = body

        return cls(
            message=(
                f"Failed to decode Straico API JSON response: {reason}"
                f" | Raw Response Body (truncated): {excerpt}"
            ),
            body_excerpt=excerpt,
            status_code=status_code,
        )


class ApiError(StraicoError):
    """
    The service reported ``success: false``.

    Attributes:
        status_code: HTTP status code of the response
        payload: The decoded response body
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.status_code = status_code
        self.payload = payload

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"status_code={self.status_code})"
        )

    @classmethod
    def from_envelope(
        cls,
        payload: Dict[str, Any],
        status_code: Optional[int] = None
    ) -> "ApiError":
        """Create an error from a failed response envelope."""
        reason = payload.get("message")
        if reason is None:
            reason = payload.get("error")
        if reason is None:
            reason = json.dumps(payload)
        elif not isinstance(reason, str):
            reason = json.dumps(reason)

        return cls(
            message=f"Straico API Error: {reason}",
            status_code=status_code,
            payload=payload,
        )
