"""Load and save lists of models through a key-value store."""

import logging
from typing import List, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..ports.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def load_model_list(store: KeyValueStore, key: str, model: Type[ModelT]) -> List[ModelT]:
    """Read a stored list, degrading to an empty list on any corruption."""
    try:
        raw = store.read(key)
    except (OSError, ValueError) as e:
        logger.warning(f"⚠️ Could not read '{key}', starting empty: {e}")
        return []

    if raw is None:
        return []
    if not isinstance(raw, list):
        logger.warning(f"⚠️ Stored '{key}' is not a list, starting empty")
        return []

    try:
        return [model.model_validate(item) for item in raw]
    except ValidationError as e:
        logger.warning(f"⚠️ Stored '{key}' is corrupt, starting empty: {e.error_count()} error(s)")
        return []


def save_model_list(store: KeyValueStore, key: str, items: Sequence[BaseModel]) -> None:
    """Overwrite the stored list with items."""
    try:
        store.write(key, [item.model_dump(mode="json") for item in items])
    except OSError as e:
        logger.error(f"❌ Failed to save '{key}': {e}")
