from fastapi import Depends, HTTPException
from .dependencies import get_current_user
from .error_handlers import get_error_message


def _role_required(required_role: str):
    def check_role(user=Depends(get_current_user)):
        if user.get("role") != required_role:
            raise HTTPException(status_code=403, detail=get_error_message("forbidden"))
        return user
    return check_role


admin_only = _role_required("admin")
