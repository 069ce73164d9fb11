from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field
import logging

from ..config import ADMIN_ACCESS_CODE_HASH
from ..utils.jwt import create_access_token
from ..utils.security import verify_access_code
from ..utils.error_handlers import get_error_message

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


class VerifyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_code: str = Field(alias="accessCode")


@router.post("/verify")
def verify(payload: VerifyRequest):
    if not ADMIN_ACCESS_CODE_HASH:
        raise HTTPException(status_code=503, detail=get_error_message("admin_login_disabled"))

    if not verify_access_code(payload.access_code, ADMIN_ACCESS_CODE_HASH):
        logger.warning("Rejected admin access code")
        raise HTTPException(status_code=401, detail=get_error_message("invalid_access_code"))

    token = create_access_token({"sub": "staff", "role": "admin"})
    return {"success": True, "access_token": token, "token_type": "bearer"}
