"""
Straico Python SDK

A thin client for the Straico API: model listing, prompt completion,
file upload and image generation.

Quick Start:
    from straico import Straico

    client = Straico(api_key="sk_xxx")

    # Available models
    models = client.list_models()

    # Prompt completion across models
    result = client.create_prompt_completion(
        models=["openai/gpt-4o-mini"],
        message="Explain quantum mechanics like I'm 5",
    )

    # Upload a file, then use it as context
    upload = client.upload_file("report.pdf")

    # Async usage
    async with AsyncStraico(api_key="sk_xxx") as async_client:
        models = await async_client.list_models()
"""

from .client import Straico, __version__
from .async_client import AsyncStraico
from .config import ClientConfig, DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from .models import Envelope, EnvelopeKind, UploadPart
from .errors import (
    StraicoError,
    ConfigurationError,
    ValidationError,
    TransportError,
    DecodeError,
    ApiError,
)

__all__ = [
    # Clients
    "Straico",
    "AsyncStraico",
    # Configuration
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    # Models
    "Envelope",
    "EnvelopeKind",
    "UploadPart",
    # Errors
    "StraicoError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    "DecodeError",
    "ApiError",
]
