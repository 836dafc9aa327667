import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from elite_coach.core import site_content
from elite_coach.core.dependencies import get_contact_repository
from elite_coach.models.contact import ContactMessage
from elite_coach.repositories.contact_repository import ContactRepository
from elite_coach.schemas.site import ContactCreate, ContactRead, SiteContent

logger = logging.getLogger(__name__)

router = APIRouter(tags=["site"])


@router.get("/content", response_model=SiteContent)
async def get_content():
    """Everything the public landing page renders."""
    return SiteContent(
        hero=site_content.HERO,
        about=site_content.ABOUT,
        services=site_content.SERVICES,
        testimonials=site_content.TESTIMONIALS,
        contact=site_content.CONTACT,
    )


@router.post("/contact", response_model=ContactRead, status_code=status.HTTP_201_CREATED)
async def submit_contact(
    data: ContactCreate,
    repo: ContactRepository = Depends(get_contact_repository),
):
    message = ContactMessage(
        name=data.name.strip(),
        email=data.email,
        phone=data.phone,
        message=data.message.strip(),
    )
    try:
        created = await repo.create(message)
    except SQLAlchemyError as e:
        await repo.rollback()
        logger.error(f"Error saving contact message: {e}")
        raise HTTPException(status_code=500, detail="Failed to send message. Please try again.")

    logger.info(f"Contact message {created.id} received from {created.email}")
    return created
