"""
Job postings and their application-form schemas.
"""
from datetime import date
import logging
from typing import Any

from sqlalchemy.orm import Session

from ..utils.error_handlers import ValidationError, get_error_message
from ..utils.validation import validate_choice, validate_string_field, validate_string_list
from .document_store import JOBS, get_collection, new_document_id
from .form_fields import normalize_form_fields

logger = logging.getLogger(__name__)

URGENCIES = ("low", "medium", "high")
REQUIRED_JOB_FIELDS = ("title", "type", "location", "department", "description")
MUTABLE_JOB_FIELDS = (
    "title",
    "type",
    "location",
    "department",
    "salaryRange",
    "description",
    "requirements",
    "benefits",
    "postedDate",
    "urgency",
    "formFields",
    "active",
)


def _clean_job_values(values: dict[str, Any]) -> dict[str, Any]:
    """Validate whichever mutable job keys are present in `values`."""
    out: dict[str, Any] = {}
    for key in MUTABLE_JOB_FIELDS:
        if key not in values:
            continue
        v = values[key]
        if key in REQUIRED_JOB_FIELDS:
            out[key] = validate_string_field(v, key, max_length=20000 if key == "description" else 255)
        elif key in ("salaryRange", "postedDate"):
            out[key] = validate_string_field(v, key, min_length=0, max_length=100, required=False)
        elif key in ("requirements", "benefits"):
            out[key] = validate_string_list(v, key)
        elif key == "urgency":
            out[key] = validate_choice(v, "urgency", URGENCIES)
        elif key == "formFields":
            out[key] = normalize_form_fields(v)
        elif key == "active":
            if not isinstance(v, bool):
                raise ValidationError("active must be a boolean", details={"field": "active"})
            out[key] = v
    return out


def list_jobs(db: Session) -> list[dict]:
    return get_collection(db, JOBS).find()


def get_job(db: Session, job_id: str) -> dict | None:
    return get_collection(db, JOBS).find_one({"id": str(job_id)})


def create_job(db: Session, draft: dict[str, Any]) -> dict:
    missing = [k for k in REQUIRED_JOB_FIELDS if not draft.get(k)]
    if missing or not isinstance(draft.get("formFields"), list):
        raise ValidationError(
            get_error_message("invalid_job_data"),
            details={"missing": missing or ["formFields"]},
        )

    values = _clean_job_values({k: v for k, v in draft.items() if k != "postedDate"})
    job = {
        "id": new_document_id(),
        "title": values["title"],
        "type": values["type"],
        "location": values["location"],
        "department": values["department"],
        "salaryRange": values.get("salaryRange"),
        "description": values["description"],
        "requirements": values.get("requirements", []),
        "benefits": values.get("benefits", []),
        "postedDate": date.today().isoformat(),
        "urgency": values.get("urgency", "medium"),
        "formFields": values["formFields"],
        "active": values.get("active", True),
    }
    created = get_collection(db, JOBS).insert_one(job)
    logger.info("Created job %s (%s)", created["id"], created["title"])
    return created


def update_job(db: Session, job_id: str, patch: dict[str, Any]) -> dict | None:
    """Whitelist partial update. Unknown keys, `id` included, are ignored. None if not found."""
    jobs = get_collection(db, JOBS)
    if jobs.find_one({"id": str(job_id)}) is None:
        return None

    allowed = _clean_job_values({k: v for k, v in (patch or {}).items() if k in MUTABLE_JOB_FIELDS})
    if allowed and not jobs.update_one({"id": str(job_id)}, allowed):
        # Deleted between the read and the write.
        return None
    return jobs.find_one({"id": str(job_id)})


def delete_job(db: Session, job_id: str) -> bool:
    # Applications keep their own jobTitle snapshot, so nothing cascades.
    deleted = get_collection(db, JOBS).delete_one({"id": str(job_id)})
    if deleted:
        logger.info("Deleted job %s", job_id)
    return bool(deleted)
