"""Port interface for hosted classifier backends."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field

HARM_CATEGORIES = (
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)

# Most permissive threshold: the content is being analysed, not generated.
BLOCK_NONE = "BLOCK_NONE"

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "domain": {"type": "STRING"},
        "label": {"type": "STRING"},
        "confidence": {
            "type": "NUMBER",
            "description": "Confidence score between 0 and 100",
        },
        "reason": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["domain", "label", "confidence", "reason"],
}


class BinaryPart(BaseModel):
    """Inline media sent to the classifier."""

    content_type: str = Field(..., description="Advisory MIME type")
    payload: str = Field(..., description="Base64 encoded content")


class TextPart(BaseModel):
    """Plain text sent to the classifier."""

    text: str


class SafetySetting(BaseModel):
    """Blocking threshold for one hazard category."""

    category: str
    threshold: str = BLOCK_NONE


class ClassificationRequest(BaseModel):
    """Backend-neutral classification request.

    Media parts always come before the text part; the classifier relies on
    that order.
    """

    system_instruction: str
    parts: List[Union[BinaryPart, TextPart]] = Field(default_factory=list)
    safety: List[SafetySetting] = Field(
        default_factory=lambda: [SafetySetting(category=c) for c in HARM_CATEGORIES]
    )
    response_schema: Dict[str, Any] = Field(default_factory=lambda: dict(RESPONSE_SCHEMA))

    @property
    def binary_parts(self) -> List[BinaryPart]:
        return [part for part in self.parts if isinstance(part, BinaryPart)]

    @property
    def text_parts(self) -> List[TextPart]:
        return [part for part in self.parts if isinstance(part, TextPart)]


class ClassifierProvider(ABC):
    """Abstract interface for classifier backends.

    Adapters turn a ClassificationRequest into a call against a hosted
    model and hand back the raw JSON text of the answer. Parsing and schema
    checks happen in the domain, not in the adapters.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare clients and resources."""
        pass

    @abstractmethod
    async def classify(self, request: ClassificationRequest) -> str:
        """Run the request and return the raw JSON text.

        Returns:
            The model's JSON answer, or an empty string when the backend
            suppressed the answer

        Raises:
            MissingCredentialsError: If no API key is configured
            TransportError: If the backend could not be reached
        """
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        """Release clients and resources."""
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the provider name."""
        pass

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider is configured and ready."""
        pass
