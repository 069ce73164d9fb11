import logging
from typing import Any

from sqlalchemy.orm import Session

from ..utils.error_handlers import ValidationError, get_error_message
from .document_store import ARTICLES, get_collection, new_document_id

logger = logging.getLogger(__name__)

DEFAULT_IMAGE = "/news/placeholder-thumb-1.jpg"
EXCERPT_LENGTH = 150
CREATE_REQUIRED = ("title", "subtitle", "content", "category", "type")
UPDATE_REQUIRED = ("title", "content", "category", "type")
MUTABLE_ARTICLE_FIELDS = (
    "title",
    "subtitle",
    "content",
    "excerpt",
    "category",
    "type",
    "authorName",
    "authorPosition",
    "date",
    "image",
    "featured",
)


def _require(values: dict, names: tuple[str, ...]) -> None:
    missing = [n for n in names if not values.get(n)]
    if missing:
        raise ValidationError(get_error_message("invalid_article_data"), details={"missing": missing})


def default_excerpt(content: str) -> str:
    return content[:EXCERPT_LENGTH] + ("..." if len(content) > EXCERPT_LENGTH else "")


def list_articles(db: Session) -> list[dict]:
    # Listings skip the body; readers fetch it per article.
    return get_collection(db, ARTICLES).find(exclude=("content",))


def get_article(db: Session, article_id: str) -> dict | None:
    return get_collection(db, ARTICLES).find_one({"id": str(article_id)})


def create_article(db: Session, draft: dict[str, Any]) -> dict:
    _require(draft, CREATE_REQUIRED)
    content = str(draft["content"])
    article = {
        "id": new_document_id(),
        "title": draft["title"],
        "subtitle": draft["subtitle"],
        "content": content,
        "excerpt": draft.get("excerpt") or default_excerpt(content),
        "category": draft["category"],
        "type": draft["type"],
        "authorName": draft.get("authorName"),
        "authorPosition": draft.get("authorPosition"),
        "date": draft.get("date"),
        "image": draft.get("image") or DEFAULT_IMAGE,
        "featured": bool(draft.get("featured", False)),
    }
    created = get_collection(db, ARTICLES).insert_one(article)
    logger.info("Created article %s", created["id"])
    return created


def update_article(db: Session, article_id: str, body: dict[str, Any]) -> dict | None:
    _require(body, UPDATE_REQUIRED)
    articles = get_collection(db, ARTICLES)
    if articles.find_one({"id": str(article_id)}) is None:
        return None
    allowed = {k: body[k] for k in MUTABLE_ARTICLE_FIELDS if k in body}
    if "featured" in allowed:
        allowed["featured"] = bool(allowed["featured"])
    if not articles.update_one({"id": str(article_id)}, allowed):
        return None
    return articles.find_one({"id": str(article_id)})


def delete_article(db: Session, article_id: str) -> bool:
    return bool(get_collection(db, ARTICLES).delete_one({"id": str(article_id)}))
