"""Custom exception classes for the application."""

class BaseMailerException(Exception):
    """Base exception for all application-specific errors."""
    pass

class ConfigError(BaseMailerException):
    """Error related to configuration loading or values."""
    pass

class AuthenticationError(BaseMailerException):
    """Error during the OAuth 2.0 authentication process."""
    pass

class APIError(BaseMailerException):
    """Error interacting with a Google API (Sheets, Docs, Drive, Gmail)."""
    def __init__(self, message: str, status_code: int | None = None, service: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.service = service

    def __str__(self) -> str:
        base = super().__str__()
        details = []
        if self.service:
            details.append(f"Service: {self.service}")
        if self.status_code:
            details.append(f"Status Code: {self.status_code}")
        if details:
            return f"{base} ({', '.join(details)})"
        return base

class DocumentError(BaseMailerException):
    """Error creating, writing or exporting a feedback document."""
    pass

class CertificateResolutionError(BaseMailerException):
    """A certificate reference could not be turned into file content."""
    def __init__(self, message: str, reference: str | None = None):
        super().__init__(message)
        self.reference = reference
