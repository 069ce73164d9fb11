from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.articles import ArticleIn
from ..services import article_registry
from ..utils.error_handlers import get_error_message
from ..utils.roles import admin_only

router = APIRouter(prefix="/articles", tags=["Articles"])


@router.get("")
def list_articles(db: Session = Depends(get_db)):
    return article_registry.list_articles(db)


@router.get("/{article_id}")
def get_article(article_id: str, db: Session = Depends(get_db)):
    article = article_registry.get_article(db, article_id)
    if not article:
        raise HTTPException(status_code=404, detail=get_error_message("article_not_found"))
    return article


@router.post("", status_code=201)
def create_article(payload: ArticleIn, db: Session = Depends(get_db), user=Depends(admin_only)):
    return article_registry.create_article(db, payload.sent_values())


@router.put("/{article_id}")
def update_article(
    article_id: str,
    payload: ArticleIn,
    db: Session = Depends(get_db),
    user=Depends(admin_only),
):
    article = article_registry.update_article(db, article_id, payload.sent_values())
    if not article:
        raise HTTPException(status_code=404, detail=get_error_message("article_not_found"))
    return article


@router.delete("/{article_id}")
def delete_article(article_id: str, db: Session = Depends(get_db), user=Depends(admin_only)):
    if not article_registry.delete_article(db, article_id):
        raise HTTPException(status_code=404, detail=get_error_message("article_not_found"))
    return {"success": True}
