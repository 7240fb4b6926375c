"""
Error taxonomy for complaint analysis.
Each error knows its HTTP status and the JSON body returned to the caller.
"""
from typing import Optional


class TriageError(Exception):
    """Base class for request-terminating analysis failures."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {'error': self.message}


class InputError(TriageError, ValueError):
    """Raised when the complaints batch is missing, empty, or not a list."""
    status_code = 400

    def __init__(self, message: str = 'Complaints (non-empty array) required.'):
        super().__init__(message)


class ConfigError(TriageError, RuntimeError):
    """Raised when the provider credential is not configured."""
    status_code = 500

    def __init__(self, message: str = 'CLAUDE_API_KEY not configured on server.'):
        super().__init__(message)


class ProviderError(TriageError, RuntimeError):
    """Raised on network failure, timeout, or non-2xx from the completion provider."""
    status_code = 500

    def __init__(self, detail: str, message: str = 'Analysis failed'):
        super().__init__(message)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.message}: {self.detail}"

    def to_dict(self) -> dict:
        return {'error': self.message, 'detail': self.detail}


class UnparseableOutputError(TriageError, RuntimeError):
    """Raised when the provider answered but no usable JSON array could be recovered."""
    status_code = 502

    def __init__(self, raw: Optional[str], message: str = 'Unable to parse AI response'):
        super().__init__(message)
        self.raw = raw or ''

    def to_dict(self) -> dict:
        return {'error': self.message, 'raw': self.raw}
