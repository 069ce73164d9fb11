from sqlalchemy import Column, DateTime, ForeignKey, Integer, LargeBinary, String, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class BlobFile(Base):
    __tablename__ = "blob_files"

    id = Column(String(32), primary_key=True)  # uuid4 hex
    filename = Column(String(255), nullable=False)
    content_type = Column(String(120), nullable=False, default="application/octet-stream")
    length = Column(Integer, nullable=False, default=0)
    chunk_size = Column(Integer, nullable=False)
    upload_date = Column(DateTime(timezone=True), server_default=func.now())

    chunks = relationship(
        "BlobChunk",
        back_populates="file",
        cascade="all, delete-orphan",
        order_by="BlobChunk.n",
    )


class BlobChunk(Base):
    __tablename__ = "blob_chunks"
    __table_args__ = (
        UniqueConstraint("file_id", "n", name="uq_blob_chunks_file_n"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    file_id = Column(String(32), ForeignKey("blob_files.id", ondelete="CASCADE"), nullable=False, index=True)
    n = Column(Integer, nullable=False)
    data = Column(LargeBinary, nullable=False)

    file = relationship("BlobFile", back_populates="chunks")
