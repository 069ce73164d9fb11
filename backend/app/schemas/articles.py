from pydantic import BaseModel, ConfigDict, Field


class ArticleIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str | None = None
    subtitle: str | None = None
    content: str | None = None
    excerpt: str | None = None
    category: str | None = None
    type: str | None = None
    author_name: str | None = Field(default=None, alias="authorName")
    author_position: str | None = Field(default=None, alias="authorPosition")
    date: str | None = None
    image: str | None = None
    featured: bool | None = None

    def sent_values(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True)
