"""
Straico SDK - Async Client

Async client for non-blocking API interactions.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping, Optional, Union

import httpx

from .client import (
    FILE_UPLOAD_PATH,
    IMAGE_GENERATION_PATH,
    MODELS_PATH,
    PROMPT_COMPLETION_PATH,
    UPLOAD_FIELD_NAME,
    __version__,
    default_headers,
    handle_response,
    open_upload,
    request_options,
    to_transport_error,
)
from .config import ClientConfig
from .models import (
    UploadPart,
    build_payload,
    validate_image_generation,
    validate_prompt_completion,
    validate_upload_path,
)


logger = logging.getLogger("straico.async_client")


class AsyncStraico:
    """
    Straico Async Python Client.

    Same operations and error semantics as ``Straico``, as coroutines.

    Args:
        api_key: Your Straico API key. If not provided, reads from STRAICO_API_KEY env var.
        base_url: Base URL for the API. Defaults to https://api.straico.com/v1
        timeout: Request timeout in seconds. Defaults to 30.

    Example:
        >>> async with AsyncStraico(api_key="sk_xxx") as client:
        ...     models = await client.list_models()
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
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_config(cls, config: ClientConfig) -> AsyncStraico:
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

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                headers=default_headers(
                    self._config, f"straico-python-async/{__version__}"
                ),
                timeout=self._config.timeout,
            )
        return self._client

    async def list_models(self) -> Any:
        """List the currently available chat and image models."""
        return await self._request("GET", MODELS_PATH)

    async def create_prompt_completion(
        self,
        params: Optional[Mapping[str, Any]] = None,
        **kwargs
    ) -> Any:
        """
        Create completions for a prompt.

        See ``Straico.create_prompt_completion`` for parameters.
        """
        payload = validate_prompt_completion(build_payload(params, kwargs))
        return await self._request("POST", PROMPT_COMPLETION_PATH, json_body=payload)

    async def upload_file(
        self,
        file_path: Union[str, "os.PathLike[str]"],
        filename: Optional[str] = None
    ) -> Any:
        """Upload a local file to be used as prompt context."""
        name = validate_upload_path(file_path, filename)
        url = self._config.host_url() + FILE_UPLOAD_PATH

        with open_upload(file_path) as fh:
            part = UploadPart(field_name=UPLOAD_FIELD_NAME, content=fh, filename=name)
            return await self._request("POST", url, upload=part)

    async def create_image_generation(
        self,
        params: Optional[Mapping[str, Any]] = None,
        **kwargs
    ) -> Any:
        """Generate images from a description."""
        payload = validate_image_generation(build_payload(params, kwargs))
        url = self._config.host_url() + IMAGE_GENERATION_PATH
        return await self._request("POST", url, json_body=payload)

    async def _request(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        upload: Optional[UploadPart] = None,
    ) -> Any:
        """Send one async request and normalize the response."""
        client = await self._get_client()
        logger.debug("Straico request: %s %s", method, path)
        try:
            response = await client.request(
                method, path, **request_options(json_body, upload)
            )
        except httpx.TimeoutException as e:
            raise to_transport_error("Request timed out", e, timed_out=True) from e
        except httpx.ConnectError as e:
            raise to_transport_error("Failed to connect to API", e) from e
        except httpx.HTTPError as e:
            raise to_transport_error(f"Request failed: {e}", e) from e

        return handle_response(response)

    async def close(self):
        """Close the async HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.close()
