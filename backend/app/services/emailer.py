from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr, parseaddr
import html
import logging
import os
import smtplib

logger = logging.getLogger(__name__)

DEFAULT_FROM_NAME = "Recruiting"
DEFAULT_ORGANIZATION = "the Institution"

# Sends run here so callers can stop waiting on a stuck server.
_SEND_POOL = ThreadPoolExecutor(max_workers=4, thread_name_prefix="status-email")


def _env_bool(name: str, default: str = "1") -> bool:
    v = (os.getenv(name, default) or default).strip().lower()
    return v in {"1", "true", "yes", "y", "on"}


@dataclass
class SmtpSettings:
    host: str
    port: int
    user: str
    password: str
    use_tls: bool
    timeout: float
    from_email: str
    from_name: str


@dataclass
class NotificationResult:
    attempted: bool = False
    sent: bool = False


def sender_from_env() -> tuple[str, str]:
    """
    (address, display name) for outgoing mail.

    FROM_EMAIL_ADDRESS / FROM_EMAIL_NAME win; otherwise FROM_EMAIL may carry both as
    `Name <address>`; SMTP_USER is the last resort for the address.
    """
    address = (os.getenv("FROM_EMAIL_ADDRESS") or "").strip()
    name = (os.getenv("FROM_EMAIL_NAME") or "").strip()
    combined = (os.getenv("FROM_EMAIL") or "").strip()
    if not address and combined:
        parsed_name, parsed_address = parseaddr(combined)
        address = parsed_address.strip()
        if not name and parsed_name:
            name = parsed_name.replace('"', "").replace("'", "").strip()
    if not address:
        address = (os.getenv("SMTP_USER") or "").strip()
    return address, name or DEFAULT_FROM_NAME


def smtp_settings_from_env() -> SmtpSettings | None:
    """
    Env vars:
      SMTP_HOST, SMTP_PORT, SMTP_USER, SMTP_PASS, SMTP_TLS, EMAIL_TIMEOUT_S,
      FROM_EMAIL_ADDRESS, FROM_EMAIL_NAME, FROM_EMAIL

    Returns None when no host or sender address is configured.
    """
    host = (os.getenv("SMTP_HOST") or "").strip()
    from_email, from_name = sender_from_env()
    if not host or not from_email:
        return None
    return SmtpSettings(
        host=host,
        port=int((os.getenv("SMTP_PORT") or "587").strip()),
        user=(os.getenv("SMTP_USER") or "").strip(),
        password=(os.getenv("SMTP_PASS") or "").strip(),
        use_tls=_env_bool("SMTP_TLS", "1"),
        timeout=float((os.getenv("EMAIL_TIMEOUT_S") or "15").strip()),
        from_email=from_email,
        from_name=from_name,
    )


def build_status_email(*, status: str, first_name: str, job_title: str) -> tuple[str, str, str]:
    """(subject, text body, html body). `rejected` gets the decline letter; every other status the offer."""
    org = (os.getenv("ORGANIZATION_NAME") or DEFAULT_ORGANIZATION).strip()
    name = first_name or "Applicant"
    jt = job_title or "the role"

    if (status or "").lower() == "rejected":
        subject = f"Regarding your application for {jt} - {org}"
        paragraphs = [
            f"Dear {name},",
            f"Thank you for your interest in the {jt} role at {org} and for the time you invested "
            "in your application. After a careful and competitive review, we won't be moving forward "
            "at this time.",
            "This decision isn't a reflection of a lack of talent. Many strong candidates applied for "
            "a limited number of openings. We encourage you to reapply in the future as new roles open "
            "that may be an even closer match to your experience.",
            f"With appreciation,\n{org} Recruiting",
        ]
        steps: list[str] = []
    else:
        subject = f"Offer: {jt} at {org}"
        onboarding_url = (os.getenv("ONBOARDING_URL") or "").strip()
        steps = []
        if onboarding_url:
            steps.append(f"Join our onboarding channel within 24-48 hours: {onboarding_url}")
        steps.append("Reply to this email to confirm acceptance and your earliest start-date availability.")
        steps.append("We will follow up with your onboarding checklist and scheduling details.")
        paragraphs = [
            f"Dear {name},",
            f"We are delighted to offer you the position of {jt} at {org}.",
            "Next steps to confirm and begin onboarding:",
            "",
            "We're excited to welcome you to the team.",
            f"Warmly,\n{org} Recruiting",
        ]

    text_lines: list[str] = []
    html_parts: list[str] = []
    for p in paragraphs:
        if p == "":
            text_lines.extend(f"{i}. {s}" for i, s in enumerate(steps, start=1))
            html_parts.append("<ol>" + "".join(f"<li>{html.escape(s)}</li>" for s in steps) + "</ol>")
            continue
        text_lines.append(p)
        text_lines.append("")
        html_parts.append("<p>" + html.escape(p).replace("\n", "<br/>") + "</p>")

    return subject, "\n".join(text_lines).strip() + "\n", "".join(html_parts)


def send_status_email(
    *,
    settings: SmtpSettings,
    to_email: str,
    status: str,
    first_name: str,
    job_title: str,
) -> None:
    """Send one status email. Raises on any transport failure."""
    subject, text_body, html_body = build_status_email(status=status, first_name=first_name, job_title=job_title)

    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = formataddr((settings.from_name, settings.from_email))
    msg["To"] = to_email
    msg.set_content(text_body)
    msg.add_alternative(html_body, subtype="html")

    # Timeout applies to every socket operation, connect included.
    with smtplib.SMTP(settings.host, settings.port, timeout=settings.timeout) as smtp:
        smtp.ehlo()
        if settings.use_tls:
            smtp.starttls()
            smtp.ehlo()
        if settings.user and settings.password:
            smtp.login(settings.user, settings.password)
        smtp.send_message(msg)
    logger.info("Status email (%s) sent to %s", status, to_email)


def notify_status_change(*, to_email: str, status: str, first_name: str, job_title: str) -> NotificationResult:
    """
    Best-effort send. Never raises; reports whether a send was tried and whether it went out.

    The whole SMTP exchange runs on a worker thread and the caller waits at most
    `EMAIL_TIMEOUT_S` for it; the socket timeout only bounds each read.
    """
    settings = smtp_settings_from_env()
    if settings is None:
        logger.info("Email not configured; skipping status email to %s", to_email)
        return NotificationResult(attempted=False, sent=False)

    future = _SEND_POOL.submit(
        send_status_email,
        settings=settings,
        to_email=to_email,
        status=status,
        first_name=first_name,
        job_title=job_title,
    )
    try:
        future.result(timeout=settings.timeout)
    except FuturesTimeoutError:
        # The worker finishes (or hits its socket timeout) in the background.
        future.cancel()
        logger.warning("Status email to %s did not finish within %ss (non-fatal)", to_email, settings.timeout)
        return NotificationResult(attempted=True, sent=False)
    except Exception as e:
        logger.warning("Status email to %s failed (non-fatal): %s: %s", to_email, type(e).__name__, e)
        return NotificationResult(attempted=True, sent=False)
    return NotificationResult(attempted=True, sent=True)
