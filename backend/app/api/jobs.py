import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.jobs import JobIn
from ..services import job_registry
from ..utils.error_handlers import get_error_message
from ..utils.roles import admin_only

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.get("")
def list_jobs(db: Session = Depends(get_db)):
    return job_registry.list_jobs(db)


@router.get("/{job_id}")
def get_job(job_id: str, db: Session = Depends(get_db)):
    job = job_registry.get_job(db, job_id)
    if not job:
        raise HTTPException(status_code=404, detail=get_error_message("job_not_found"))
    return job


@router.post("", status_code=201)
def create_job(
    payload: JobIn,
    db: Session = Depends(get_db),
    user=Depends(admin_only),
):
    return job_registry.create_job(db, payload.sent_values())


@router.put("/{job_id}")
def update_job(
    job_id: str,
    payload: JobIn,
    db: Session = Depends(get_db),
    user=Depends(admin_only),
):
    job = job_registry.update_job(db, job_id, payload.sent_values())
    if not job:
        raise HTTPException(status_code=404, detail=get_error_message("job_not_found"))
    return job


@router.delete("/{job_id}")
def delete_job(
    job_id: str,
    db: Session = Depends(get_db),
    user=Depends(admin_only),
):
    if not job_registry.delete_job(db, job_id):
        raise HTTPException(status_code=404, detail=get_error_message("job_not_found"))
    return {"success": True, "deleted_job_id": job_id}
