"""
Centralized error handling and user-friendly error messages.
"""
from fastapi.responses import JSONResponse


class AppError(Exception):
    """Base application error."""
    def __init__(self, message: str, status_code: int = 500, details: dict | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed request: rejected before any store access."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=400, details=details)


class NotFoundError(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Resource not found", details: dict | None = None):
        super().__init__(message, status_code=404, details=details)


class BusinessRuleError(AppError):
    """Well-formed request refused by a business rule."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=400, details=details)


class JobUnavailableError(BusinessRuleError):
    """Job is missing or inactive. Both cases share one message on purpose."""
    def __init__(self, details: dict | None = None):
        super().__init__(get_error_message("job_closed"), details=details)


class MissingFieldError(BusinessRuleError):
    """A field the job's form marks required was not submitted."""
    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Missing field: {field_name}", details={"field": field_name})


# User-friendly error messages
ERROR_MESSAGES = {
    # Authentication
    "invalid_access_code": "Invalid access code",
    "admin_login_disabled": "Admin login is not configured on this server.",
    "session_expired": "Your session has expired. Please login again.",

    # Files
    "no_file": "No file was provided.",
    "file_not_found": "File not found.",

    # Jobs
    "job_not_found": "Job not found",
    "job_closed": "This job is not accepting applications.",
    "invalid_job_data": "Missing required fields",

    # Applications
    "application_not_found": "Application not found",
    "invalid_application": "Invalid payload",

    # Articles
    "article_not_found": "Article not found",
    "invalid_article_data": "Missing required fields",

    # General
    "unauthorized": "Please login to access this feature.",
    "forbidden": "You don't have permission to access this resource.",
    "server_error": "Something went wrong on our end. Please try again later.",
    "database_error": "Database connection issue. Please try again later.",
    "validation_error": "Please check your input and try again.",
}


def get_error_message(error_key: str, default: str | None = None) -> str:
    """Get a user-friendly error message."""
    return ERROR_MESSAGES.get(error_key, default or ERROR_MESSAGES["server_error"])


def create_error_response(
    status_code: int,
    message: str,
    details: dict | None = None
) -> JSONResponse:
    """Create a standardized error response."""
    content = {
        "success": False,
        "error": message,
    }

    if details:
        content["details"] = details

    return JSONResponse(
        status_code=status_code,
        content=content
    )
