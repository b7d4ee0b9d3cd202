from __future__ import annotations

from typing import Any, Dict, Optional, Union

import httpx


class HalcyonClientError(Exception):
    """Base error for client failures."""


class UnknownRelationError(HalcyonClientError, LookupError):
    def __init__(self, rel: str):
        super().__init__(f'Cannot find ref "{rel}".')
        self.rel = rel


class UnsupportedContentTypeError(HalcyonClientError):
    def __init__(self, content_type: str):
        super().__init__(f"Unsupported response type {content_type}.")
        self.content_type = content_type


class HalcyonParseError(HalcyonClientError):
    pass


class HalcyonModelValidationError(HalcyonClientError):
    pass


class HalcyonConnectionError(HalcyonClientError):
    pass


class HalcyonResponseError(HalcyonClientError):
    """A request completed with a non-success status."""

    def __init__(self, message: str, *, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class HalcyonHTTPError(HalcyonResponseError):
    def __init__(self, *, status_code: int, status_text: str):
        super().__init__(
            f"Generic server error with status {status_code} {status_text} returned.",
            status_code=status_code,
        )
        self.status_text = status_text


class HalError(HalcyonResponseError):
    """
    Structured server error.
    The body carried a ``message`` and optionally an ``errors`` map from
    field name to validation message.
    """

    def __init__(self, error_data: Dict[str, Any], status_code: int):
        message = error_data.get("message")
        super().__init__(
            message if isinstance(message, str) else str(message),
            status_code=status_code,
        )
        self.message = message
        self._errors: Optional[Dict[str, Any]] = error_data.get("errors")

    def get_status_code(self) -> int:
        return self.status_code

    def get_validation_error(self, name: str) -> Optional[str]:
        """Return the validation message for ``name`` or None if there is none."""
        if self.has_validation_errors():
            return self._errors.get(name)
        return None

    def has_validation_error(self, name: str) -> bool:
        if self.has_validation_errors():
            return name in self._errors
        return False

    def get_validation_errors(self) -> Optional[Dict[str, Any]]:
        return self._errors

    def has_validation_errors(self) -> bool:
        return isinstance(self._errors, dict)

    @staticmethod
    def add_key(base_name: str, key: str) -> str:
        # Server reports nested fields with a capitalised child segment.
        if base_name != "":
            return f"{base_name}.{key[:1].upper()}{key[1:]}"
        return key

    @staticmethod
    def add_index(base_name: str, key: str, index: Union[str, int]) -> str:
        return f"{base_name}{key}[{index}]"


def classify_error(
    response: httpx.Response, document: Any
) -> Union[HalError, HalcyonHTTPError]:
    """
    Turn a failed response into an exception.
    - HalError when the parsed body carries a ``message`` field
    - HalcyonHTTPError otherwise (including unparseable bodies, pass None)
    """
    if isinstance(document, dict) and "message" in document:
        return HalError(document, response.status_code)
    return HalcyonHTTPError(
        status_code=response.status_code, status_text=response.reason_phrase
    )


__all__ = [
    "HalcyonClientError",
    "UnknownRelationError",
    "UnsupportedContentTypeError",
    "HalcyonParseError",
    "HalcyonModelValidationError",
    "HalcyonConnectionError",
    "HalcyonResponseError",
    "HalcyonHTTPError",
    "HalError",
    "classify_error",
]
