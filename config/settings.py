# Path: config/settings.py
# Purpose: Provide typed application configuration models.
# Layer: config.
# Details: Centralizes model identifiers, provider endpoints, storage paths, and server options.

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from core.errors import ConfigurationError

DEFAULT_ROUTER_URL = "https://router.huggingface.co"
TOKEN_ENV_VARS = ("HF_TOKEN", "HUGGINGFACE_TOKEN", "VITE_HF_TOKEN")


def _port(value: Optional[str]) -> int:
    if not value:
        return 3000
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"PORT must be an integer, got {value!r}") from None


class ModelSettings(BaseModel):
    """Hosted model identifiers, one per model role."""

    text: str = Field(default="Qwen/Qwen2.5-7B-Instruct", description="Text-generation model for the consultant.")
    vision: str = Field(default="Qwen/Qwen2.5-VL-7B-Instruct", description="Vision-language model for style extraction.")
    embedding: str = Field(default="openai/clip-vit-base-patch32", description="Feature-extraction model for style embeddings.")
    image: str = Field(default="runwayml/stable-diffusion-v1-5", description="Text-to-image model for generation.")


class ProviderSettings(BaseModel):
    """Settings describing where inference requests are sent and how they authenticate."""

    base_url: str = Field(default=DEFAULT_ROUTER_URL, description="Root URL of the inference router or local proxy.")
    chat_completions_path: str = Field(default="v1/chat/completions", description="Chat completions route below base_url.")
    models_path: str = Field(default="models", description="Per-model inference route prefix below base_url.")
    token: Optional[str] = Field(default=None, repr=False, description="Bearer credential; None when going through the proxy.")
    timeout: float = Field(default=120.0, description="Request timeout in seconds.")

    @classmethod
    def for_proxy(cls, proxy_url: str, timeout: float = 120.0) -> "ProviderSettings":
        """Route requests through a PaletteAI forwarding proxy instead of the provider."""

        return cls(
            base_url=f"{proxy_url.rstrip('/')}/api/hf",
            chat_completions_path="chat/completions",
            models_path="models",
            token=None,
            timeout=timeout,
        )

    def chat_completions_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.chat_completions_path.strip('/')}"

    def model_url(self, model_id: str) -> str:
        if not model_id or not model_id.strip("/ "):
            raise ConfigurationError("Model id must not be empty.")
        return f"{self.base_url.rstrip('/')}/{self.models_path.strip('/')}/{model_id.strip('/')}"


class StorageSettings(BaseModel):
    """Settings controlling where style profiles are persisted."""

    library_path: Path = Field(default=Path("storage/library.json"), description="Key-value file holding the style library.")
    storage_key: str = Field(default="palette_ai_profiles", description="Key under which profiles are serialized.")


class ServerSettings(BaseModel):
    """Settings for the forwarding proxy server."""

    host: str = Field(default="0.0.0.0", description="Interface the proxy binds to.")
    port: int = Field(default=3000, description="Port the proxy listens on.")
    upstream_url: str = Field(default=DEFAULT_ROUTER_URL, description="Provider URL requests are forwarded to.")
    token: Optional[str] = Field(default=None, repr=False, description="Server-side credential injected into forwarded requests.")


class AppSettings(BaseModel):
    """Top-level application settings shared across services and interfaces."""

    models: ModelSettings = Field(default_factory=ModelSettings)
    provider: ProviderSettings = Field(default_factory=ProviderSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppSettings":
        """Instantiate settings from environment variables when available."""

        env = os.environ if environ is None else environ
        token = next((env[name] for name in TOKEN_ENV_VARS if env.get(name)), None)
        base_url = env.get("HF_BASE_URL") or DEFAULT_ROUTER_URL

        defaults = ModelSettings()
        models = ModelSettings(
            text=env.get("HF_TEXT_MODEL") or defaults.text,
            vision=env.get("HF_VLM_MODEL") or defaults.vision,
            embedding=env.get("HF_EMBED_MODEL") or defaults.embedding,
            image=env.get("HF_FLUX_MODEL") or defaults.image,
        )

        proxy_url = env.get("PALETTEAI_PROXY_URL")
        provider = ProviderSettings.for_proxy(proxy_url) if proxy_url else ProviderSettings(base_url=base_url, token=token)

        storage = StorageSettings()
        if env.get("PALETTEAI_LIBRARY_PATH"):
            storage = StorageSettings(library_path=Path(env["PALETTEAI_LIBRARY_PATH"]))

        server = ServerSettings(port=_port(env.get("PORT")), upstream_url=base_url, token=token)

        return cls(
            models=models,
            provider=provider,
            storage=storage,
            server=server,
            log_level=env.get("PALETTEAI_LOG_LEVEL") or "INFO",
        )


__all__ = ["AppSettings", "ModelSettings", "ProviderSettings", "ServerSettings", "StorageSettings"]
