"""Gemini implementation of the classifier provider interface."""

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, Field

from ...domain.errors import MissingCredentialsError, TransportError
from ...domain.ports.classifier_provider import (
    BinaryPart,
    ClassificationRequest,
    ClassifierProvider,
)

logger = logging.getLogger(__name__)


class GeminiConfig(BaseModel):
    """Configuration for Gemini adapter."""

    api_key: str = Field(default="", description="Google Generative Language API key")
    model: str = Field(default="gemini-2.5-pro", description="Model to use")
    timeout: float = Field(default=60.0, description="API timeout in seconds")
    base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="REST endpoint root",
    )


class GeminiAdapter(ClassifierProvider):
    """Calls the Gemini ``generateContent`` REST endpoint with a JSON schema."""

    def __init__(
        self,
        config: Optional[GeminiConfig] = None,
        provider_name: str = "Gemini",
    ):
        """Initialize the adapter."""
        self._config = config or GeminiConfig()
        self._name = provider_name
        self._client: Optional[httpx.AsyncClient] = None
        self._initialized = False

    async def initialize(self) -> None:
        """Create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                headers={
                    "x-goog-api-key": self._config.api_key,
                    "Content-Type": "application/json",
                },
            )
        self._initialized = True

    async def classify(self, request: ClassificationRequest) -> str:
        """Send the request and return the model's JSON text."""
        if not self._config.api_key:
            raise MissingCredentialsError("API Key not found in environment variables.")
        if self._client is None:
            await self.initialize()

        try:
            response = await self._client.post(
                f"/models/{self._config.model}:generateContent",
                json=self.build_payload(request),
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise TransportError(f"Gemini request failed: {e}") from e
        except ValueError as e:
            raise TransportError(f"Gemini returned a non-JSON body: {e}") from e

        text = self.extract_text(data)
        if not text:
            logger.warning(f"⚠️ Gemini empty response: {data}")
        return text

    @staticmethod
    def build_payload(request: ClassificationRequest) -> Dict[str, Any]:
        """Translate a ClassificationRequest into the REST body."""
        parts = []
        for part in request.parts:
            if isinstance(part, BinaryPart):
                parts.append({"inlineData": {"mimeType": part.content_type, "data": part.payload}})
            else:
                parts.append({"text": part.text})

        return {
            "systemInstruction": {"parts": [{"text": request.system_instruction}]},
            "contents": [{"role": "user", "parts": parts}],
            "safetySettings": [
                {"category": s.category, "threshold": s.threshold} for s in request.safety
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": request.response_schema,
            },
        }

    @staticmethod
    def extract_text(data: Dict[str, Any]) -> str:
        """Pull the answer text out of a response; empty when it was suppressed."""
        block_reason = (data.get("promptFeedback") or {}).get("blockReason")
        if block_reason:
            logger.warning(f"🛑 Gemini blocked the prompt: {block_reason}")
            return ""

        candidates = data.get("candidates") or []
        if not candidates:
            return ""

        content = candidates[0].get("content") or {}
        return "".join(part.get("text", "") for part in content.get("parts") or [])

    async def shutdown(self) -> None:
        """Clean up resources and shut down the provider."""
        if self._client:
            await self._client.aclose()
            self._client = None
        self._initialized = False

    @property
    def provider_name(self) -> str:
        return self._name

    @property
    def is_available(self) -> bool:
        return bool(self._config.api_key) and self._initialized
