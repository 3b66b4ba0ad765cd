"""Domain model for emergency contacts."""

from uuid import uuid4

from pydantic import BaseModel, Field


class EmergencyContact(BaseModel):
    """A person to reach through the SOS panel."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str
    phone: str

    class Config:
        """Pydantic model configuration."""
        frozen = True
