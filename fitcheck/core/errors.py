from __future__ import annotations


class FitCheckError(RuntimeError):
    """Base for failures that surface to the caller as an error response."""

    def __init__(self, message: str, *, code: str = "internal_error", status_code: int = 500):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class MissingInputError(FitCheckError):
    def __init__(self, message: str, *, field: str):
        super().__init__(message, code="missing_input", status_code=400)
        self.field = field


class ConfigurationError(FitCheckError):
    def __init__(self, message: str):
        super().__init__(message, code="configuration_error", status_code=500)


class ProviderCallError(FitCheckError):
    def __init__(self, message: str, *, code: str = "provider_error"):
        super().__init__(message, code=code, status_code=504 if code == "timeout" else 502)


class HttpStatusError(RuntimeError):
    def __init__(self, status_code: int, url: str):
        super().__init__(f"Failed to fetch URL ({status_code})")
        self.status_code = status_code
        self.url = url


class DocumentError(ValueError):
    pass
