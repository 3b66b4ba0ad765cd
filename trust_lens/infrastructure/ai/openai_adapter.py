"""OpenAI implementation of the classifier provider interface."""

import copy
import logging
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel, Field

from ...domain.errors import MissingCredentialsError, TransportError
from ...domain.ports.classifier_provider import (
    BinaryPart,
    ClassificationRequest,
    ClassifierProvider,
)

logger = logging.getLogger(__name__)


class OpenAIConfig(BaseModel):
    """Configuration for OpenAI adapter."""

    api_key: str = Field(default="", description="OpenAI API key")
    model: str = Field(default="gpt-4o", description="Model to use")
    timeout: float = Field(default=60.0, description="API timeout in seconds")


def to_json_schema(schema: Dict[str, Any]) -> Dict[str, Any]:
    """Convert the uppercase response schema into strict JSON Schema."""
    converted = copy.deepcopy(schema)
    if "type" in converted:
        converted["type"] = converted["type"].lower()
    if converted.get("type") == "object":
        converted["additionalProperties"] = False
        converted["properties"] = {
            name: to_json_schema(prop) for name, prop in converted.get("properties", {}).items()
        }
    if "items" in converted:
        converted["items"] = to_json_schema(converted["items"])
    return converted


class OpenAIAdapter(ClassifierProvider):
    """Chat completions with a strict JSON schema response format.

    Video is not accepted by the chat API, and there are no per-request
    safety thresholds to relax.
    """

    def __init__(
        self,
        config: Optional[OpenAIConfig] = None,
        provider_name: str = "OpenAI",
    ):
        """Initialize the adapter."""
        self._config = config or OpenAIConfig()
        self._name = provider_name
        self._client: Optional[AsyncOpenAI] = None

    async def initialize(self) -> None:
        """Create the API client."""
        if self._client is None and self._config.api_key:
            self._client = AsyncOpenAI(api_key=self._config.api_key, timeout=self._config.timeout)

    async def classify(self, request: ClassificationRequest) -> str:
        """Send the request and return the model's JSON text."""
        if not self._config.api_key:
            raise MissingCredentialsError("OPENAI_API_KEY is not set")
        if self._client is None:
            await self.initialize()

        messages = self.build_messages(request)
        try:
            response = await self._client.chat.completions.create(
                model=self._config.model,
                messages=messages,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "analysis_result",
                        "strict": True,
                        "schema": to_json_schema(request.response_schema),
                    },
                },
            )
        except OpenAIError as e:
            raise TransportError(f"OpenAI request failed: {e}") from e

        message = response.choices[0].message
        if getattr(message, "refusal", None):
            logger.warning(f"🛑 OpenAI refused: {message.refusal}")
            return ""
        return message.content or ""

    @staticmethod
    def build_messages(request: ClassificationRequest) -> List[Dict[str, Any]]:
        """Translate a ClassificationRequest into chat messages.

        Raises:
            TransportError: If the request contains video
        """
        content: List[Dict[str, Any]] = []
        for part in request.parts:
            if isinstance(part, BinaryPart):
                if not part.content_type.startswith("image/"):
                    raise TransportError(f"OpenAI does not accept {part.content_type} input")
                content.append({
                    "type": "image_url",
                    "image_url": {"url": f"data:{part.content_type};base64,{part.payload}"},
                })
            else:
                content.append({"type": "text", "text": part.text})

        return [
            {"role": "system", "content": request.system_instruction},
            {"role": "user", "content": content},
        ]

    async def shutdown(self) -> None:
        if self._client:
            await self._client.close()
            self._client = None

    @property
    def provider_name(self) -> str:
        return self._name

    @property
    def is_available(self) -> bool:
        return self._client is not None
