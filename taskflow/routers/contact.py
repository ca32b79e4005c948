# taskflow/routers/contact.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskflow.config.settings import settings
from taskflow.database import get_db
from taskflow.models.contact import ContactMessage
from taskflow.models.user import User
from taskflow.schemas.contact import ContactCreate
from taskflow.schemas.tokens import MessageOut
from taskflow.utils.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Contact"])

@router.post("/contact", response_model=MessageOut)
def submit_contact(
    contact: ContactCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Store a contact form submission from the authenticated user"""
    message = ContactMessage(
        name=contact.name,
        email=contact.email,
        message=contact.message,
        user_id=current_user.id,
    )
    db.add(message)
    db.commit()

    logger.info(f"Contact message {message.id} received from user {current_user.id}")
    return {"message": "Thank you for contacting us! We will get back to you soon."}

@router.get("/about")
def about():
    """Static application information"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "description": (
            "A task management platform with role-based access control, "
            "priority and status tracking, due date management and dashboard analytics."
        ),
        "features": [
            "Task Creation and Management",
            "Role-based Access Control",
            "Priority and Status Tracking",
            "Due Date Management",
            "Search and Filtering",
            "Dashboard Analytics",
            "User Authentication",
            "Contact Support System",
        ],
    }
