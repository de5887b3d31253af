"""
Domain exceptions for the report engine.

Services raise these so callers (the wizard, scripts, tests) can tell a
refused action from a failed fetch or a failed export without inspecting
library-specific exception types.
"""


class AppError(Exception):
    """Base application error with an HTTP-equivalent status code."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationError(AppError):
    """Input validation failure (400)."""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(self, message: str = "Not found"):
        super().__init__(message, status_code=404)


class ReportFetchError(AppError):
    """The report API returned no data for a required payload (502)."""

    def __init__(self, message: str = "Failed to fetch report data"):
        super().__init__(message, status_code=502)


class ExportError(AppError):
    """Rendering or rasterizing a report document failed (500)."""

    def __init__(self, message: str = "Failed to export report"):
        super().__init__(message, status_code=500)
