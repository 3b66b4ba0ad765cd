"""Builds classifier requests and validates their answers."""

import json
import logging
from typing import List, Optional, Sequence, Union

from pydantic import BaseModel, Field, ValidationError

from ..errors import (
    ClassificationError,
    MissingCredentialsError,
    SafetySuppressionError,
    SchemaError,
    TransportError,
)
from ..models.analysis import AnalysisResult
from ..models.detector import DetectorId
from ..models.media import MediaItem
from ..ports.classifier_provider import (
    BinaryPart,
    ClassificationRequest,
    ClassifierProvider,
    TextPart,
)
from .detector_registry import DetectorRegistry, default_registry

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_MESSAGE = (
    "No response from AI model. The content might have been blocked by safety filters."
)


class ClassifierPayload(BaseModel):
    """Exact shape the classifier must answer with."""

    domain: str
    label: str
    confidence: float = Field(..., ge=0, le=100)
    reason: List[str]

    class Config:
        """Pydantic model configuration."""
        extra = "forbid"
        strict = True


def parse_classifier_payload(raw: Optional[str]) -> AnalysisResult:
    """Turn the classifier's raw JSON text into an AnalysisResult.

    Raises:
        SafetySuppressionError: If the payload is empty
        SchemaError: If the payload is not JSON or does not match the schema
    """
    if not raw or not raw.strip():
        raise SafetySuppressionError(EMPTY_RESPONSE_MESSAGE)

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SchemaError(f"Classifier answer is not valid JSON: {e}") from e

    try:
        payload = ClassifierPayload.model_validate(data)
        return AnalysisResult(
            domain=payload.domain or None,
            label=payload.label,
            confidence=payload.confidence,
            reason=tuple(payload.reason),
        )
    except ValidationError as e:
        raise SchemaError(f"Classifier answer does not match the schema: {e}") from e


class ClassificationClient:
    """Classifies one submission against a detector's instruction."""

    def __init__(
        self,
        provider: Optional[ClassifierProvider],
        registry: DetectorRegistry = default_registry,
    ):
        """Initialize the client.

        Args:
            provider: Classifier backend; None when none is configured
            registry: Detector catalog used to resolve instructions
        """
        self._provider = provider
        self._registry = registry

    @property
    def provider(self) -> Optional[ClassifierProvider]:
        return self._provider

    def build_request(
        self,
        detector_id: Union[DetectorId, str],
        text: str,
        media: Sequence[MediaItem],
    ) -> ClassificationRequest:
        """Assemble the request: ready media first, then the text."""
        parts: List[Union[BinaryPart, TextPart]] = [
            BinaryPart(content_type=item.advisory_content_type, payload=item.encoded_payload)
            for item in media
            if item.is_ready
        ]
        if text and text.strip():
            parts.append(TextPart(text=text))

        return ClassificationRequest(
            system_instruction=self._registry.instruction_for(detector_id),
            parts=parts,
        )

    async def classify(
        self,
        detector_id: Union[DetectorId, str],
        text: str,
        media: Sequence[MediaItem] = (),
    ) -> AnalysisResult:
        """Classify text and media with the detector's instruction.

        Raises:
            MissingCredentialsError: If no provider or API key is configured
            TransportError: If the backend call fails
            SafetySuppressionError: If the backend returns nothing
            SchemaError: If the answer does not match the schema
        """
        if self._provider is None:
            raise MissingCredentialsError("No classifier provider configured")

        request = self.build_request(detector_id, text, media)
        logger.info(
            f"🔍 Classifying for {detector_id}: {len(request.binary_parts)} media part(s), "
            f"{len(request.text_parts)} text part(s)"
        )

        try:
            raw = await self._provider.classify(request)
        except ClassificationError:
            raise
        except Exception as e:
            raise TransportError(f"{self._provider.provider_name} call failed: {e}") from e

        result = parse_classifier_payload(raw)
        logger.info(f"✅ Verdict: {result.label} ({result.confidence:.0f}%)")
        return result
