"""Protocol for durable local key-value state."""

from typing import Any, Protocol


class KeyValueStore(Protocol):
    """Small durable store holding one JSON document per key."""

    def read(self, key: str) -> Any:
        """Return the decoded document, or None if the key was never written.

        Raises:
            ValueError: If the stored document cannot be decoded
        """
        ...

    def write(self, key: str, value: Any) -> None:
        """Replace the document stored under key."""
        ...
