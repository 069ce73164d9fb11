"""
Candidate submissions against a job's form schema.

Checks run in order: payload shape (no store access), job availability, then
required fields. Only after all three pass is anything written.
"""
from datetime import datetime, timezone
import logging
from typing import Any

from sqlalchemy.orm import Session

from ..utils.error_handlers import JobUnavailableError, MissingFieldError, ValidationError, get_error_message
from ..utils.sanitize import strip_embedded_markup
from .document_store import APPLICATIONS, JOBS, get_collection, new_document_id
from .form_fields import coerce_value, required_names

logger = logging.getLogger(__name__)

INITIAL_STATUS = "new"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _check_payload(job_id: Any, fields: Any, files: Any) -> None:
    invalid = get_error_message("invalid_application")
    if not job_id or not isinstance(job_id, str):
        raise ValidationError(invalid, details={"field": "jobId"})
    if not isinstance(fields, list):
        raise ValidationError(invalid, details={"field": "fields"})
    for f in fields:
        if not isinstance(f, dict) or not isinstance(f.get("name"), str) or not f["name"]:
            raise ValidationError(invalid, details={"field": "fields"})
    if files is not None and (
        not isinstance(files, list) or not all(isinstance(x, dict) for x in files)
    ):
        raise ValidationError(invalid, details={"field": "files"})


def _sanitize_fields(fields: list[dict]) -> list[dict]:
    return [
        {
            "name": f["name"],
            "label": strip_embedded_markup(str(f.get("label") or "")),
            "type": str(f.get("type") or ""),
            "value": coerce_value(f.get("type"), f.get("value")),
        }
        for f in fields
    ]


def find_field_value(fields: list[dict], name: str) -> Any:
    """Value of the first field whose name matches `name` case-insensitively."""
    wanted = name.lower()
    for f in fields or []:
        if str(f.get("name", "")).lower() == wanted:
            return f.get("value")
    return None


def submit_application(
    db: Session,
    *,
    job_id: Any,
    fields: Any,
    job_title: str | None = None,
    files: Any = None,
) -> dict:
    _check_payload(job_id, fields, files)

    job = get_collection(db, JOBS).find_one({"id": job_id})
    if not job or not job.get("active"):
        # Same answer for missing and inactive jobs.
        raise JobUnavailableError(details={"jobId": job_id})

    provided = {f["name"] for f in fields}
    for name in required_names(job.get("formFields") or []):
        if name not in provided:
            raise MissingFieldError(name)

    sanitized = _sanitize_fields(fields)
    email = find_field_value(sanitized, "email")

    now = _now_iso()
    application = {
        "id": new_document_id(),
        "jobId": job_id,
        "jobTitle": job_title or job.get("title"),
        "status": INITIAL_STATUS,
        "fields": sanitized,
        "files": list(files) if files else None,
        "email": email if isinstance(email, str) and email else None,
        "createdAt": now,
        "updatedAt": now,
    }
    stored = get_collection(db, APPLICATIONS).insert_one(application)
    logger.info("Application %s received for job %s", stored["id"], job_id)
    return stored
