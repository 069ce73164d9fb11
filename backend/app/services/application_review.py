"""
Admin review of submitted applications.

Any status may follow any other; the workflow (new -> in_review -> shortlist or
rejected -> hired) is driven by the dashboard, not enforced here. A status change
notifies the applicant by email after the write has committed, and the email
outcome is only reported back, never raised.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import Any, Callable

from sqlalchemy.orm import Session

from ..utils.error_handlers import NotFoundError, get_error_message
from ..utils.validation import validate_choice
from . import emailer
from .application_intake import find_field_value
from .document_store import APPLICATIONS, get_collection

logger = logging.getLogger(__name__)

APPLICATION_STATUSES = ("new", "in_review", "shortlist", "rejected", "hired")

Notifier = Callable[..., emailer.NotificationResult]


@dataclass
class ReviewOutcome:
    application: dict
    email_attempted: bool = False
    email_sent: bool = False

    def as_response(self) -> dict:
        return {**self.application, "emailAttempted": self.email_attempted, "emailSent": self.email_sent}


def list_applications(db: Session, job_id: str | None = None) -> list[dict]:
    query = {"jobId": job_id} if job_id else {}
    return get_collection(db, APPLICATIONS).find(query)


def get_application(db: Session, application_id: str) -> dict | None:
    return get_collection(db, APPLICATIONS).find_one({"id": str(application_id)})


def _applicant_first_name(application: dict) -> str:
    value = find_field_value(application.get("fields") or [], "firstName")
    return value if isinstance(value, str) and value else "Applicant"


def _notify(application: dict, status: str, notifier: Notifier) -> emailer.NotificationResult:
    try:
        return notifier(
            to_email=str(application["email"]),
            status=status,
            first_name=_applicant_first_name(application),
            job_title=application.get("jobTitle") or "",
        )
    except Exception as e:
        # Notifiers should not raise, but the status write has already committed either way.
        logger.warning("Notifier raised for application %s: %s", application.get("id"), e)
        return emailer.NotificationResult(attempted=True, sent=False)


def set_status(
    db: Session,
    application_id: str,
    *,
    status: Any = None,
    notes: Any = None,
    notifier: Notifier | None = None,
) -> ReviewOutcome:
    changes: dict[str, Any] = {}
    if status:
        changes["status"] = validate_choice(status, "status", APPLICATION_STATUSES)
    if notes:
        changes["notes"] = str(notes)

    applications = get_collection(db, APPLICATIONS)
    existing = applications.find_one({"id": str(application_id)})
    if existing is None:
        raise NotFoundError(get_error_message("application_not_found"))

    changes["updatedAt"] = datetime.now(timezone.utc).isoformat()
    if not applications.update_one({"id": str(application_id)}, changes):
        raise NotFoundError(get_error_message("application_not_found"))
    updated = {**existing, **changes}
    logger.info("Application %s updated: %s", application_id, {k: v for k, v in changes.items() if k != "notes"})

    outcome = ReviewOutcome(application=updated)
    if "status" in changes and updated.get("email"):
        result = _notify(updated, changes["status"], notifier or emailer.notify_status_change)
        outcome.email_attempted = result.attempted
        outcome.email_sent = result.sent
    return outcome


def remove_application(db: Session, application_id: str) -> bool:
    deleted = get_collection(db, APPLICATIONS).delete_one({"id": str(application_id)})
    if deleted:
        logger.info("Removed application %s from the working pool", application_id)
    return bool(deleted)
