# flashfit/routers/contact.py
from typing import Annotated

from fastapi import APIRouter, Depends, status

from ..models import ContactSubmission
from ..schemas import ContactSubmissionRequest, ContactSubmissionOut
from ..services.events import publish_event
from .auth import db_dependency, require_admin

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("/submit", status_code=status.HTTP_201_CREATED)
def submit_contact_form(body: ContactSubmissionRequest, db: db_dependency):
    submission = ContactSubmission(
        name=body.name,
        email=body.email,
        phone=body.phone,
        message=body.message,
    )
    db.add(submission)
    db.commit()
    db.refresh(submission)

    publish_event(
        "contact.submitted",
        {
            "submission_id": submission.id,
            "name": submission.name,
            "email": submission.email,
            "phone": submission.phone,
            "message": submission.message,
        },
    )

    return {
        "success": True,
        "message": "Thank you for contacting us! We'll be in touch soon.",
        "submissionId": submission.id,
    }


@router.get("/submissions")
def list_submissions(db: db_dependency, admin: Annotated[dict, Depends(require_admin)]):
    rows = db.query(ContactSubmission).order_by(ContactSubmission.created_at.desc(), ContactSubmission.id.desc()).all()
    return {
        "success": True,
        "count": len(rows),
        "submissions": [ContactSubmissionOut.model_validate(r).model_dump() for r in rows],
    }
