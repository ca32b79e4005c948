# taskflow/exceptions.py
"""Domain errors raised by the services and mapped to HTTP responses in main.py"""

from typing import Any, Dict, Optional


class TaskflowError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code = 400
    default_detail = "Request could not be processed"

    def __init__(self, detail: Optional[str] = None, errors: Optional[Dict[str, Any]] = None):
        self.detail = detail or self.default_detail
        self.errors = errors or {}
        super().__init__(self.detail)


class ValidationFailure(TaskflowError):
    status_code = 422
    default_detail = "The given data was invalid"


class NotFound(TaskflowError):
    status_code = 404
    default_detail = "Resource not found"


class AuthorizationDenied(TaskflowError):
    status_code = 403
    default_detail = "Unauthorized"
