"""
Chunked binary object storage.

Files are split into fixed-size chunks stored as ordered rows, with one metadata
row per file. The returned file id is opaque to callers.
"""
from dataclasses import dataclass
import logging
from uuid import uuid4

from sqlalchemy.orm import Session

from ..config import BLOB_CHUNK_SIZE
from ..models.blob import BlobChunk, BlobFile

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class StoredObject:
    data: bytes
    content_type: str
    filename: str


def upload(
    db: Session,
    data: bytes,
    *,
    filename: str,
    content_type: str | None = None,
    chunk_size: int | None = None,
) -> str:
    size = int(chunk_size or BLOB_CHUNK_SIZE)
    if size <= 0:
        raise ValueError("chunk_size must be positive")

    file_id = uuid4().hex
    blob = BlobFile(
        id=file_id,
        filename=filename,
        content_type=content_type or DEFAULT_CONTENT_TYPE,
        length=len(data),
        chunk_size=size,
    )
    chunks = [BlobChunk(n=n, data=data[start:start + size]) for n, start in enumerate(range(0, len(data), size))]
    blob.chunks.extend(chunks)

    try:
        db.add(blob)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Stored file %s (%s, %d bytes, %d chunks)", file_id, filename, len(data), len(chunks))
    return file_id


def download(db: Session, file_id: str) -> StoredObject | None:
    blob = db.query(BlobFile).filter(BlobFile.id == str(file_id)).first()
    if not blob:
        return None
    chunks = (
        db.query(BlobChunk)
        .filter(BlobChunk.file_id == blob.id)
        .order_by(BlobChunk.n.asc())
        .all()
    )
    return StoredObject(
        data=b"".join(c.data for c in chunks),
        content_type=blob.content_type or DEFAULT_CONTENT_TYPE,
        filename=blob.filename or "file",
    )
