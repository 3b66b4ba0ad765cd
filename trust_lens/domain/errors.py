"""Exception hierarchy for the TrustLens domain."""


class TrustLensError(Exception):
    """Base class for all TrustLens errors."""


class InputValidationError(TrustLensError, ValueError):
    """User input was rejected before any request was built."""


class EmptySubmissionError(InputValidationError):
    """Submission has neither text nor ready media."""


class InvalidUrlError(InputValidationError):
    """A URL could not be parsed as an absolute http(s) URL."""


class MediaTooLargeError(InputValidationError):
    """A remote resource is bigger than the per-item size ceiling."""


class UnknownDetectorError(TrustLensError, KeyError):
    """Detector id is not part of the catalog."""


class ClassificationError(TrustLensError):
    """Classification of a submission failed."""


class MissingCredentialsError(ClassificationError):
    """The classifier backend has no API key configured."""


class TransportError(ClassificationError):
    """The classifier backend could not be reached or rejected the call."""


class SafetySuppressionError(ClassificationError):
    """The backend answered with an empty payload, usually a safety block."""


class SchemaError(ClassificationError):
    """The backend payload does not match the verdict schema."""
