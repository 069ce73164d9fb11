import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile
from sqlalchemy.orm import Session

from ..database import get_db
from ..services import object_store
from ..utils.error_handlers import get_error_message
from ..utils.validation import clean_filename

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["Files"])

STORAGE_NAME = "blob"
DOWNLOAD_CACHE_CONTROL = "private, max-age=600"


@router.post("/upload", status_code=201)
async def upload_file(
    file: UploadFile | None = File(default=None),
    db: Session = Depends(get_db),
):
    if file is None:
        raise HTTPException(status_code=400, detail=get_error_message("no_file"))

    # Type/size limits are a form-level hint only; whatever arrives is stored.
    data = await file.read()
    filename = clean_filename(file.filename)
    file_id = object_store.upload(
        db,
        data,
        filename=filename,
        content_type=file.content_type or object_store.DEFAULT_CONTENT_TYPE,
    )
    return {
        "success": True,
        "url": f"{router.prefix}/{file_id}",
        "fileId": file_id,
        "storage": STORAGE_NAME,
        "filename": filename,
    }


@router.get("/{file_id}")
def download_file(file_id: str, db: Session = Depends(get_db)):
    stored = object_store.download(db, file_id)
    if stored is None:
        raise HTTPException(status_code=404, detail=get_error_message("file_not_found"))
    return Response(
        content=stored.data,
        media_type=stored.content_type,
        headers={
            "Content-Disposition": f'inline; filename="{quote(stored.filename, safe="")}"',
            "Cache-Control": DOWNLOAD_CACHE_CONTROL,
        },
    )
