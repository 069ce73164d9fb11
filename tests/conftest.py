import os
import smtplib
import sys
import threading
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker


# Ensure `import backend.app...` works regardless of where pytest is run from.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Test modules import backend.app at collection time; keep a developer .env out of it.
os.environ["DISABLE_DOTENV"] = "1"

EMAIL_ENV_VARS = (
    "SMTP_HOST",
    "SMTP_PORT",
    "SMTP_USER",
    "SMTP_PASS",
    "SMTP_TLS",
    "FROM_EMAIL",
    "FROM_EMAIL_ADDRESS",
    "FROM_EMAIL_NAME",
    "ONBOARDING_URL",
    "ORGANIZATION_NAME",
    "EMAIL_TIMEOUT_S",
)


@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("db") / "test.sqlite3"


@pytest.fixture(autouse=True)
def _no_real_email(monkeypatch: pytest.MonkeyPatch):
    # Tests never reach a real mail server even if the developer machine has SMTP set.
    for name in EMAIL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def app(test_db_path: Path) -> FastAPI:
    """
    Create a FastAPI app wired to a temporary SQLite DB.

    Routers and handlers come from `backend.app.main`, but its startup hook is not
    run; tables are created here instead.
    """
    os.environ["DATABASE_URL"] = f"sqlite+pysqlite:///{test_db_path}"

    from backend.app import database as db

    engine = create_engine(
        os.environ["DATABASE_URL"],
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", db.set_sqlite_pragmas)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    # Patch the shared database module so router dependencies use the test DB.
    db.engine = engine
    db.SessionLocal = TestingSessionLocal

    # Import models so Base metadata is populated, then create tables.
    from backend.app.models import blob, document  # noqa: F401

    db.Base.metadata.drop_all(bind=engine)
    db.Base.metadata.create_all(bind=engine)

    from backend.app.main import include_routers, register_exception_handlers

    fastapi_app = FastAPI()
    include_routers(fastapi_app)
    register_exception_handlers(fastapi_app)
    return fastapi_app


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def db_session(app: FastAPI):
    """
    Direct SQLAlchemy session bound to the same temporary SQLite DB used by the test app.
    """
    from backend.app.database import SessionLocal

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def admin_headers(app: FastAPI) -> dict:
    from backend.app.utils.jwt import create_access_token

    token = create_access_token({"sub": "staff", "role": "admin"})
    return {"Authorization": f"Bearer {token}"}


class FakeSMTP:
    """Stand-in for smtplib.SMTP that records messages instead of sending them."""

    sent: list = []
    fail_with: Exception | None = None
    hold: threading.Event | None = None

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.timeout = timeout

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def ehlo(self):
        # A held server never answers; once released it drops the connection.
        hold = FakeSMTP.hold
        if hold is not None:
            hold.wait(timeout=30)
            raise smtplib.SMTPServerDisconnected("connection closed")

    def starttls(self):
        pass

    def login(self, user, password):
        pass

    def send_message(self, msg):
        if FakeSMTP.fail_with is not None:
            raise FakeSMTP.fail_with
        FakeSMTP.sent.append(msg)


@pytest.fixture()
def smtp_outbox(monkeypatch: pytest.MonkeyPatch) -> list:
    """Configure email and capture outgoing messages."""
    from backend.app.services import emailer

    FakeSMTP.sent = []
    FakeSMTP.fail_with = None
    FakeSMTP.hold = None
    monkeypatch.setenv("SMTP_HOST", "smtp.example.test")
    monkeypatch.setenv("FROM_EMAIL_ADDRESS", "careers@example.org")
    monkeypatch.setenv("FROM_EMAIL_NAME", "Careers Team")
    monkeypatch.setattr(emailer.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP.sent


@pytest.fixture()
def failing_smtp(smtp_outbox: list) -> type:
    FakeSMTP.fail_with = ConnectionRefusedError("mail server down")
    yield FakeSMTP
    FakeSMTP.fail_with = None


@pytest.fixture()
def stalled_smtp(smtp_outbox: list, monkeypatch: pytest.MonkeyPatch) -> list:
    """A mail server that accepts the connection and then stops answering."""
    monkeypatch.setenv("EMAIL_TIMEOUT_S", "0.5")
    FakeSMTP.hold = threading.Event()
    yield smtp_outbox
    FakeSMTP.hold.set()
    FakeSMTP.hold = None


def make_job_payload(**overrides) -> dict:
    payload = {
        "title": "Research Assistant",
        "type": "Part-time",
        "location": "Remote",
        "department": "Policy Lab",
        "description": "Support research on technology policy.",
        "requirements": ["Strong writing", "Curiosity"],
        "benefits": ["Mentorship"],
        "formFields": [
            {"id": "f1", "name": "firstName", "label": "First name", "type": "text", "required": True},
            {"id": "f2", "name": "email", "label": "Email", "type": "email", "required": True},
            {"id": "f3", "name": "resume", "label": "Resume", "type": "file", "required": False},
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def job_payload():
    return make_job_payload


@pytest.fixture()
def make_job(client: TestClient, admin_headers: dict):
    def _make(**overrides) -> dict:
        r = client.post("/jobs", headers=admin_headers, json=make_job_payload(**overrides))
        assert r.status_code == 201, r.text
        return r.json()
    return _make
