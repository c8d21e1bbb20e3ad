"""
Straico SDK - Data Models

Response envelope parsing, multipart upload parts and request payload
validation shared by the sync and async clients.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from enum import Enum
from typing import IO, Any, Dict, Mapping, Optional, Union

import httpx

from .errors import ApiError, DecodeError, ValidationError


# ============================================================
# Response Envelope
# ============================================================

class EnvelopeKind(str, Enum):
    """Shape of a decoded response body."""

    SUCCESS = "success"  # {"success": true, "data"?: ...}
    FAILURE = "failure"  # {"success": false, "message"?: ..., "error"?: ...}
    RAW = "raw"          # anything else, passed through unchanged


@dataclass
class Envelope:
    """
    A decoded response body, tagged by shape.

    The service wraps most responses as ``{"success": bool, ...}`` but not
    all of them; bodies that do not carry a boolean ``success`` flag are
    treated as plain data.
    """
    kind: EnvelopeKind
    body: Any
    status_code: Optional[int] = None

    @classmethod
    def parse(cls, decoded: Any, status_code: Optional[int] = None) -> Envelope:
        """Classify an already decoded JSON value."""
        kind = EnvelopeKind.RAW
        if isinstance(decoded, dict):
            flag = decoded.get("success")
            if flag is True:
                kind = EnvelopeKind.SUCCESS
            elif flag is False:
                kind = EnvelopeKind.FAILURE

        return cls(kind=kind, body=decoded, status_code=status_code)

    @classmethod
    def from_response(cls, response: httpx.Response) -> Envelope:
        """
        Decode an HTTP response body, whatever its status code.

        Raises:
            DecodeError: If the body is not valid JSON.
        """
        body = response.text
        try:
            decoded = json.loads(body)
        except ValueError as e:
            raise DecodeError.from_body(body, str(e), response.status_code) from e

        return cls.parse(decoded, status_code=response.status_code)

    def unwrap(self) -> Any:
        """
        Return the result value for this envelope.

        Raises:
            ApiError: If the service reported ``success: false``.
        """
        return _UNWRAPPERS[self.kind](self)


def _unwrap_success(envelope: Envelope) -> Any:
    data = envelope.body.get("data")
    return envelope.body if data is None else data


def _unwrap_failure(envelope: Envelope) -> Any:
    raise ApiError.from_envelope(envelope.body, envelope.status_code)


def _unwrap_raw(envelope: Envelope) -> Any:
    return envelope.body


_UNWRAPPERS = {
    EnvelopeKind.SUCCESS: _unwrap_success,
    EnvelopeKind.FAILURE: _unwrap_failure,
    EnvelopeKind.RAW: _unwrap_raw,
}


# ============================================================
# Multipart Upload
# ============================================================

@dataclass
class UploadPart:
    """A single named file part of a multipart request."""
    field_name: str
    content: IO[bytes]
    filename: str

    def to_files(self) -> Dict[str, Any]:
        """Convert to the ``files`` mapping httpx expects."""
        return {self.field_name: (self.filename, self.content)}


# ============================================================
# Request Payloads
# ============================================================

PROMPT_OPTIONAL_LISTS = ("file_urls", "youtube_urls", "images")


def build_payload(
    params: Optional[Mapping[str, Any]],
    extra: Mapping[str, Any]
) -> Dict[str, Any]:
    """Merge a params mapping with keyword arguments into a new dict."""
    if params is not None and not isinstance(params, Mapping):
        raise ValidationError(
            f"params must be a mapping, got {type(params).__name__}"
        )

    payload: Dict[str, Any] = dict(params or {})
    payload.update(extra)
    return payload


def validate_prompt_completion(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Check the body of a prompt completion request."""
    models = payload.get("models")
    if not isinstance(models, list) or not models:
        raise ValidationError(
            'The "models" parameter (non-empty list) is required for '
            'create_prompt_completion.',
            param="models",
        )
    if not all(isinstance(m, str) for m in models):
        raise ValidationError(
            'The "models" parameter must contain only strings.',
            param="models",
        )

    if not isinstance(payload.get("message"), str):
        raise ValidationError(
            'The "message" parameter (string) is required for '
            'create_prompt_completion.',
            param="message",
        )

    for key in PROMPT_OPTIONAL_LISTS:
        if payload.get(key) is not None and not isinstance(payload[key], list):
            raise ValidationError(
                f'The "{key}" parameter must be a list if provided.',
                param=key,
            )

    return payload


def validate_image_generation(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Check the body of an image generation request."""
    for key in ("model", "description"):
        if not isinstance(payload.get(key), str):
            raise ValidationError(
                f'The "{key}" parameter (string) is required for '
                f'create_image_generation.',
                param=key,
            )

    if payload.get("size") is not None and not isinstance(payload["size"], str):
        raise ValidationError('The "size" parameter must be a string.', param="size")

    variations = payload.get("variations")
    if variations is not None and (
        isinstance(variations, bool) or not isinstance(variations, int)
    ):
        raise ValidationError(
            'The "variations" parameter must be an integer.',
            param="variations",
        )

    return payload


def validate_upload_path(
    file_path: Union[str, "os.PathLike[str]"],
    filename: Optional[str] = None
) -> str:
    """
    Check that a local file can be uploaded.

    Returns:
        The filename to send: ``filename`` if given, else the path's base name.
    """
    path = os.fspath(file_path)
    if not os.path.exists(path):
        raise ValidationError(f"File not found at path: {path}", param="file_path")
    if not os.path.isfile(path):
        raise ValidationError(f"Not a regular file at path: {path}", param="file_path")
    if not os.access(path, os.R_OK):
        raise ValidationError(f"File is not readable at path: {path}", param="file_path")

    if filename is not None and not filename:
        raise ValidationError("filename must not be empty", param="filename")

    return filename or os.path.basename(path)
