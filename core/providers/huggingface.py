# Path: core/providers/huggingface.py
# Purpose: Async HTTP client for the hosted inference provider (Hugging Face router).
# Layer: core/providers.
# Details: Wraps chat completions, text generation, feature extraction, and text-to-image calls.

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from config.settings import ProviderSettings
from core.errors import InferenceError

logger = logging.getLogger(__name__)


class HuggingFaceClient:
    """
    Thin request/response wrapper around the provider endpoints.

    The client talks either to the provider directly (a token is attached) or to the local
    forwarding proxy (no token; the proxy injects it). Non-2xx responses raise InferenceError.
    """

    def __init__(self, settings: ProviderSettings, http_client: Optional[httpx.AsyncClient] = None) -> None:
        self.settings = settings
        self._http = http_client
        self._owns_http = http_client is None

    async def __aenter__(self) -> "HuggingFaceClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self.settings.timeout)
        return self._http

    def _headers(self, content_type: str, accept: Optional[str] = None) -> Dict[str, str]:
        headers = {"Content-Type": content_type}
        if accept:
            headers["Accept"] = accept
        if self.settings.token:
            headers["Authorization"] = f"Bearer {self.settings.token}"
        return headers

    async def _post(self, label: str, url: str, headers: Dict[str, str], **kwargs: Any) -> httpx.Response:
        try:
            response = await self.http.post(url, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            raise InferenceError(f"{label} request failed: {exc}") from exc

        if not response.is_success:
            body = response.text
            logger.debug("%s returned %s: %s", label, response.status_code, body[:200])
            raise InferenceError(
                f"{label} error ({response.status_code}): {body or response.reason_phrase}",
                status_code=response.status_code,
                body=body,
            )
        return response

    @staticmethod
    def _json(label: str, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise InferenceError(f"{label} returned invalid JSON", status_code=response.status_code) from exc

    async def chat_completion(
        self,
        model: str,
        messages: List[Dict[str, Any]],
        max_tokens: int = 450,
        temperature: float = 0.3,
        label: str = "HF chat",
    ) -> str:
        """Run a non-streaming chat completion and return the first choice's text."""

        payload = {
            "model": model,
            "stream": False,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": messages,
        }
        response = await self._post(
            label, self.settings.chat_completions_url(), self._headers("application/json"), json=payload
        )
        data = self._json(label, response)

        content = None
        if isinstance(data, dict):
            choices = data.get("choices") or [{}]
            message = choices[0].get("message") if isinstance(choices[0], dict) else None
            content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str) or not content.strip():
            raise InferenceError(f"{label} returned no content", status_code=response.status_code)
        return content

    async def text_generation(
        self,
        model: str,
        prompt: str,
        max_new_tokens: int = 220,
        temperature: float = 0.7,
        label: str = "HF Inference text",
    ) -> str:
        """Run a text-generation call; accepts list, object, or bare-string responses."""

        payload = {
            "inputs": prompt,
            "parameters": {
                "max_new_tokens": max_new_tokens,
                "temperature": temperature,
                "return_full_text": False,
            },
            "options": {"wait_for_model": True},
        }
        response = await self._post(label, self.settings.model_url(model), self._headers("application/json"), json=payload)
        data = self._json(label, response)

        if isinstance(data, list):
            first = data[0] if data else None
            generated = first.get("generated_text") if isinstance(first, dict) else None
        elif isinstance(data, dict):
            generated = data.get("generated_text")
        else:
            generated = data

        if isinstance(generated, str) and generated.strip():
            return generated.strip()
        raise InferenceError("HF text model returned no output", status_code=response.status_code)

    async def feature_extraction(
        self, model: str, data: bytes, content_type: str = "image/png", label: str = "HF embed"
    ) -> Any:
        """Post raw bytes to a feature-extraction model and return the decoded JSON."""

        response = await self._post(label, self.settings.model_url(model), self._headers(content_type), content=data)
        return self._json(label, response)

    async def text_to_image(
        self, model: str, prompt: str, width: int, height: int, label: str = "HF Inference"
    ) -> Tuple[bytes, str]:
        """Render a prompt and return the raw image bytes with their content type."""

        payload = {
            "inputs": prompt,
            "parameters": {"width": width, "height": height},
            "options": {"wait_for_model": True},
        }
        response = await self._post(
            label,
            self.settings.model_url(model),
            self._headers("application/json", accept="image/png"),
            json=payload,
        )
        content_type = response.headers.get("content-type", "image/png").split(";")[0].strip() or "image/png"
        return response.content, content_type
