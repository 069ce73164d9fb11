import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.applications import ApplicationSubmit, ApplicationUpdate
from ..services import application_review
from ..services.application_intake import submit_application
from ..utils.error_handlers import get_error_message
from ..utils.roles import admin_only

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.post("", status_code=201)
def submit(payload: ApplicationSubmit, db: Session = Depends(get_db)):
    application = submit_application(
        db,
        job_id=payload.job_id,
        job_title=payload.job_title,
        fields=payload.fields,
        files=payload.files,
    )
    return {"success": True, "id": application["id"]}


@router.get("")
def list_applications(
    job_id: str | None = Query(default=None, alias="jobId"),
    db: Session = Depends(get_db),
    user=Depends(admin_only),
):
    return application_review.list_applications(db, job_id)


@router.get("/{application_id}")
def get_application(
    application_id: str,
    db: Session = Depends(get_db),
    user=Depends(admin_only),
):
    application = application_review.get_application(db, application_id)
    if not application:
        raise HTTPException(status_code=404, detail=get_error_message("application_not_found"))
    return application


@router.put("/{application_id}")
def update_application(
    application_id: str,
    payload: ApplicationUpdate,
    db: Session = Depends(get_db),
    user=Depends(admin_only),
):
    outcome = application_review.set_status(
        db,
        application_id,
        status=payload.status,
        notes=payload.notes,
    )
    return outcome.as_response()


@router.delete("/{application_id}")
def delete_application(
    application_id: str,
    db: Session = Depends(get_db),
    user=Depends(admin_only),
):
    if not application_review.remove_application(db, application_id):
        raise HTTPException(status_code=404, detail=get_error_message("application_not_found"))
    return {"success": True, "deleted_application_id": application_id}
