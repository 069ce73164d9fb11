import os
from pathlib import Path
from dotenv import load_dotenv

# Override=True so changes in backend/.env take effect on process reload (and not get
# stuck on old environment variables).
#
# For automated tests (SQLite), we need to prevent backend/.env from overriding the
# test DATABASE_URL. Set DISABLE_DOTENV=1 to skip loading .env.
if os.getenv("DISABLE_DOTENV") != "1":
    load_dotenv(override=True)

_raw_database_url = (os.getenv("DATABASE_URL") or "").strip()
# Default to a local SQLite DB for dev so the backend can start out-of-the-box.
# Use an absolute path so it works regardless of current working directory.
_default_sqlite_path = (Path(__file__).resolve().parent.parent / "dev.db").as_posix()
DATABASE_URL = _raw_database_url or f"sqlite:///{_default_sqlite_path}"

# Auth / JWT
# NOTE: keep a default for local dev so the server can boot even if SECRET_KEY isn't set.
SECRET_KEY = os.getenv("SECRET_KEY", "dev_secret_change_me")

# bcrypt hash of the staff access code exchanged for an admin token at /auth/verify.
# Leave empty to disable admin login entirely.
ADMIN_ACCESS_CODE_HASH = (os.getenv("ADMIN_ACCESS_CODE_HASH") or "").strip()

# -------------------- File storage (chunked blobs) --------------------
BLOB_CHUNK_SIZE = int(os.getenv("BLOB_CHUNK_SIZE", str(255 * 1024)) or str(255 * 1024))

# Email (SMTP_*, FROM_EMAIL*, EMAIL_TIMEOUT_S, ONBOARDING_URL) is read at send time in
# services/emailer.py so credentials can change without a restart.
