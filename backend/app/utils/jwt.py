from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt

from ..config import SECRET_KEY

ALGORITHM = "HS256"
# Staff sessions last a working day.
ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 12


def create_access_token(data: dict) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
