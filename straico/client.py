"""
Straico SDK - Synchronous Client

Main client for synchronous API interactions.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from .config import ClientConfig
from .errors import StraicoError, TransportError, ValidationError
from .models import (
    Envelope,
    EnvelopeKind,
    UploadPart,
    build_payload,
    validate_image_generation,
    validate_prompt_completion,
    validate_upload_path,
)


__version__ = "1.0.0"

logger = logging.getLogger("straico.client")

# v1 endpoints, relative to the configured base (which carries /v1)
MODELS_PATH = "models"
PROMPT_COMPLETION_PATH = "prompt/completion"

# v0 endpoints, appended to the bare scheme://host of the base
FILE_UPLOAD_PATH = "/v0/file/upload"
IMAGE_GENERATION_PATH = "/v0/image/generation"

UPLOAD_FIELD_NAME = "file"


class Straico:
    """
    Straico Python Client.

    Args:
        api_key: Your Straico API key. If not provided, reads from STRAICO_API_KEY env var.
        base_url: Base URL for the API. Defaults to https://api.straico.com/v1
        timeout: Request timeout in seconds. Defaults to 30.

    Example:
        >>> client = Straico(api_key="sk_xxx")
        >>> result = client.create_prompt_completion(
        ...     models=["openai/gpt-4o-mini"],
        ...     message="Explain quantum mechanics like I'm 5",
        ... )
        >>> print(result["completions"])
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self._config = ClientConfig.resolve(
            api_key=api_key, base_url=base_url, timeout=timeout
        )

        self._client = httpx.Client(
            base_url=self._config.base_url,
            headers=default_headers(self._config, f"straico-python/{__version__}"),
            timeout=self._config.timeout,
        )
        logger.debug(
            "Straico client configured for %s (timeout=%ss)",
            self._config.base_url, self._config.timeout
        )

    @classmethod
    def from_config(cls, config: ClientConfig) -> Straico:
        """Create a client from a prepared ClientConfig."""
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
        )

    @property
    def config(self) -> ClientConfig:
        """Connection settings of this client."""
        return self._config

    @property
    def base_url(self) -> str:
        """Base URL for API requests."""
        return self._config.base_url

    # ============================================================
    # Models API
    # ============================================================

    def list_models(self) -> Any:
        """
        List the currently available models.

        Returns:
            The chat and image model catalogs.
        """
        return self._request("GET", MODELS_PATH)

    # ============================================================
    # Prompt Completion API
    # ============================================================

    def create_prompt_completion(
        self,
        params: Optional[Mapping[str, Any]] = None,
        **kwargs
    ) -> Any:
        """
        Create completions for a prompt, possibly with several models at once.

        Args:
            params: Request body. Keyword arguments are merged into it.
                - models (list): Required. Model identifiers.
                - message (str): Required. The prompt.
                - file_urls (list): Optional. URLs of files used as context.
                - youtube_urls (list): Optional. YouTube URLs used as context.
                - images (list): Optional. Image URLs used as context.

        Returns:
            Overall price and word counts plus one completion per model.

        Raises:
            ValidationError: If a required parameter is missing or malformed.
        """
        payload = validate_prompt_completion(build_payload(params, kwargs))
        return self._request("POST", PROMPT_COMPLETION_PATH, json_body=payload)

    # ============================================================
    # Files API
    # ============================================================

    def upload_file(
        self,
        file_path: Union[str, "os.PathLike[str]"],
        filename: Optional[str] = None
    ) -> Any:
        """
        Upload a local file to be used as prompt context.

        Args:
            file_path: Path of the local file.
            filename: Name to upload under. Defaults to the path's base name.

        Returns:
            The upload result, e.g. ``{"url": "..."}``.

        Raises:
            ValidationError: If the file does not exist or is not readable.
        """
        name = validate_upload_path(file_path, filename)
        url = self._config.host_url() + FILE_UPLOAD_PATH

        with open_upload(file_path) as fh:
            part = UploadPart(field_name=UPLOAD_FIELD_NAME, content=fh, filename=name)
            return self._request("POST", url, upload=part)

    # ============================================================
    # Images API
    # ============================================================

    def create_image_generation(
        self,
        params: Optional[Mapping[str, Any]] = None,
        **kwargs
    ) -> Any:
        """
        Generate images from a description.

        Args:
            params: Request body. Keyword arguments are merged into it.
                - model (str): Required. Image model, e.g. "openai/dall-e-3".
                - description (str): Required. What to draw.
                - size (str): Optional. "square", "landscape" or "portrait".
                - variations (int): Optional. Number of images.

        Returns:
            URLs of the generated images (and zip) with pricing info.
        """
        payload = validate_image_generation(build_payload(params, kwargs))
        url = self._config.host_url() + IMAGE_GENERATION_PATH
        return self._request("POST", url, json_body=payload)

    # ============================================================
    # Private methods
    # ============================================================

    def _request(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        upload: Optional[UploadPart] = None,
    ) -> Any:
        """Send one request and normalize the response."""
        logger.debug("Straico request: %s %s", method, path)
        try:
            response = self._client.request(
                method, path, **request_options(json_body, upload)
            )
        except httpx.TimeoutException as e:
            raise to_transport_error("Request timed out", e, timed_out=True) from e
        except httpx.ConnectError as e:
            raise to_transport_error("Failed to connect to API", e) from e
        except httpx.HTTPError as e:
            raise to_transport_error(f"Request failed: {e}", e) from e

        return handle_response(response)

    # ============================================================
    # Context Manager
    # ============================================================

    def close(self):
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


# ============================================================
# Helpers shared with the async client
# ============================================================

def default_headers(config: ClientConfig, user_agent: str) -> Dict[str, str]:
    """Headers sent with every request."""
    return {
        "Authorization": f"Bearer {config.api_key}",
        "Accept": "application/json",
        "User-Agent": user_agent,
    }


def request_options(
    json_body: Any = None,
    upload: Optional[UploadPart] = None
) -> Dict[str, Any]:
    """httpx keyword arguments for a JSON or multipart request."""
    if upload is not None:
        # httpx sets the multipart Content-Type with its boundary
        return {"files": upload.to_files()}
    if json_body is not None:
        return {
            "json": json_body,
            "headers": {"Content-Type": "application/json"},
        }
    return {}


def open_upload(file_path: Union[str, "os.PathLike[str]"]):
    """Open a file for upload, reporting OS failures as validation errors."""
    try:
        return open(file_path, "rb")
    except OSError as e:
        raise ValidationError(
            f"Could not open file at path: {os.fspath(file_path)}: {e}",
            param="file_path",
        ) from e


def handle_response(response: httpx.Response) -> Any:
    """Decode a response and apply the envelope policy."""
    logger.debug("Straico response: HTTP %s", response.status_code)
    envelope = Envelope.from_response(response)
    if envelope.kind is EnvelopeKind.FAILURE:
        logger.warning("Straico API reported failure (HTTP %s)", response.status_code)
    elif envelope.kind is EnvelopeKind.RAW:
        logger.debug("Response body has no success envelope, passing through")
    return envelope.unwrap()


def to_transport_error(
    message: str,
    cause: httpx.HTTPError,
    timed_out: bool = False
) -> TransportError:
    """
    Wrap an httpx failure.

    If the failure carries a response, its decoded body (or raw text when
    decoding fails) becomes the error detail.
    """
    detail = None
    response = getattr(cause, "response", None)
    if isinstance(response, httpx.Response):
        try:
            detail = handle_response(response)
        except StraicoError:
            detail = response.text
        message = f"{message} - {json.dumps(detail, default=str)}"

    logger.warning("Straico API request failed: %s", message)
    return TransportError(
        f"Straico API request failed: {message}",
        cause=cause,
        timed_out=timed_out,
        detail=detail,
    )
