"""Emergency contact and SOS endpoints."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ...domain.errors import InputValidationError
from ...domain.models.contact import EmergencyContact
from ...domain.services.contact_book import ContactBook, build_sos_message, build_sos_share_link
from ...infrastructure.dependencies import get_contact_book

router = APIRouter(prefix="/contacts", tags=["contacts"])


class ContactRequest(BaseModel):
    """Request model for a new emergency contact."""

    name: str = Field(..., description="Display name")
    phone: str = Field(..., description="Phone number, any formatting")


class LocationRequest(BaseModel):
    """Coordinates supplied by the caller's device."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class SosLinkResponse(BaseModel):
    """Share link for an SOS message."""

    contact_id: str
    message: str
    url: str


@router.get("", response_model=List[EmergencyContact])
async def list_contacts(book: ContactBook = Depends(get_contact_book)) -> List[EmergencyContact]:
    return book.all()


@router.post("", response_model=EmergencyContact, status_code=201)
async def add_contact(
    request: ContactRequest,
    book: ContactBook = Depends(get_contact_book),
) -> EmergencyContact:
    try:
        return book.add(request.name, request.phone)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{contact_id}")
async def delete_contact(
    contact_id: str,
    book: ContactBook = Depends(get_contact_book),
) -> Dict[str, Any]:
    if not book.remove(contact_id):
        raise HTTPException(status_code=404, detail=f"Contact not found: {contact_id}")
    return {"deleted": contact_id}


@router.post("/{contact_id}/sos-link", response_model=SosLinkResponse)
async def sos_link(
    contact_id: str,
    location: LocationRequest,
    book: ContactBook = Depends(get_contact_book),
) -> SosLinkResponse:
    """Build the message link that shares the caller's location with a contact."""
    contact = book.get(contact_id)
    if contact is None:
        raise HTTPException(status_code=404, detail=f"Contact not found: {contact_id}")
    try:
        url = build_sos_share_link(contact.phone, location.latitude, location.longitude)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SosLinkResponse(
        contact_id=contact.id,
        message=build_sos_message(location.latitude, location.longitude),
        url=url,
    )
