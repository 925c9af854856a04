"""Errors that end a request. Anything else inside the detectors is total."""

from typing import Optional


class SniffError(Exception):
    code = "analysis_failed"
    exit_code = 1

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"error": self.code, "details": self.detail}


class InvalidRepositoryUrl(SniffError):
    """Malformed or missing repository URL. Raised before any network call."""

    code = "invalid_input"
    exit_code = 2


class GitHubFetchError(SniffError):
    """Repository or commit lookup failed; the request cannot continue."""

    code = "fetch_failed"
    exit_code = 1

    def __init__(self, detail: str, status: Optional[int] = None):
        super().__init__(detail)
        self.status = status

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.status is not None:
            payload["status"] = self.status
        return payload


class ConfigurationError(SniffError):
    """Missing or invalid credentials/settings. Setup problem, not a data problem."""

    code = "configuration_error"
    exit_code = 3
