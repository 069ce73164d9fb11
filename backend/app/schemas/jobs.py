from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class JobIn(BaseModel):
    """
    Create/update body for a job posting.

    Every key is optional here; the registry decides what is required on create and
    applies only keys that were actually sent on update. `id` and unknown keys are dropped.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str | None = None
    type: str | None = None
    location: str | None = None
    department: str | None = None
    salary_range: str | None = Field(default=None, alias="salaryRange")
    description: str | None = None
    requirements: list[Any] | None = None
    benefits: list[Any] | None = None
    posted_date: str | None = Field(default=None, alias="postedDate")
    urgency: str | None = None
    form_fields: list[Any] | None = Field(default=None, alias="formFields")
    active: bool | None = None

    def sent_values(self) -> dict[str, Any]:
        """Only the keys present in the request, in their wire (camelCase) form."""
        return self.model_dump(by_alias=True, exclude_unset=True)
