# forwardhook/errors.py
"""
Exception hierarchy for forwardhook.

ConfigError is fatal at startup. Every DispatchError is recovered per
request and mapped to an HTTP status at the API boundary.
"""

from typing import Any, Dict, Optional


class ForwardhookError(Exception):
    """Base exception for forwardhook errors."""
    pass


class ConfigError(ForwardhookError):
    """Raised when the configuration file cannot be read or is invalid."""

    # sysexits.h: EX_DATAERR
    exit_code = 66

    def __init__(self, message: str, exit_code: Optional[int] = None):
        if exit_code is not None:
            self.exit_code = exit_code
        super().__init__(message)


class DispatchError(ForwardhookError):
    """Base for errors raised while handling a single inbound request."""

    status_code = 500
    error = "dispatch_failed"

    def to_detail(self) -> Dict[str, Any]:
        """Response detail payload for this error."""
        return {"error": self.error, "message": str(self)}


class UnknownWebhook(DispatchError):
    """Raised when the request names a webhook that is not configured."""

    status_code = 404
    error = "unknown_webhook"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown webhook `{name}`")


class MalformedInput(DispatchError):
    """Raised when the request body is not valid JSON."""

    status_code = 400
    error = "malformed_input"


class MissingRequiredField(DispatchError):
    """Raised when a non-optional field's source path is not found."""

    status_code = 400
    error = "missing_required_field"

    def __init__(self, path, webhook: Optional[str] = None):
        self.path = path
        self.webhook = webhook
        where = f" in `{webhook}`" if webhook else ""
        super().__init__(f"Missing required field `{path}`{where}")

    def to_detail(self) -> Dict[str, Any]:
        detail = super().to_detail()
        detail["path"] = self.path.to_list()
        return detail


class StructuralConflict(DispatchError):
    """
    Raised when a destination path clashes with what is already built.

    `path` is the full destination path, `at` the prefix where the
    existing value has the wrong container kind.
    """

    status_code = 400
    error = "structural_conflict"

    def __init__(self, path, at=None, reason: str = "incompatible container"):
        self.path = path
        self.at = at if at is not None else path
        super().__init__(f"Cannot write `{path}`: {reason} at `{self.at}`")

    def to_detail(self) -> Dict[str, Any]:
        detail = super().to_detail()
        detail["path"] = self.path.to_list()
        detail["at"] = self.at.to_list()
        return detail


class UpstreamError(DispatchError):
    """Raised when the forward call cannot reach the upstream."""

    status_code = 502
    error = "upstream_error"

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class UpstreamTimeout(UpstreamError):
    """Raised when the forward call times out."""

    status_code = 504
    error = "upstream_timeout"
