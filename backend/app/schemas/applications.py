from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ApplicationSubmit(BaseModel):
    # Loosely typed so shape problems surface as the intake's own "Invalid payload" error.
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    job_id: Any = Field(default=None, alias="jobId")
    job_title: str | None = Field(default=None, alias="jobTitle")
    fields: Any = None
    files: Any = None


class ApplicationUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: str | None = None
    notes: Any = None
