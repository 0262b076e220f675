"""Backport exception classes."""


class BackportError(Exception):
    """Base exception for all backport errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ConfigurationError(BackportError):
    """Raised when configuration or the trigger payload is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class HostApiError(BackportError):
    """Raised when a query or mutation against the host platform fails."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message)
        self.status_code = status_code
        self.request_id = request_id


class AuthenticationError(HostApiError):
    """Raised when the token is rejected."""

    pass


class AuthorizationError(HostApiError):
    """Raised when access is denied."""

    pass


class NotFoundError(HostApiError):
    """Raised when a resource is not found."""

    pass


class ConflictError(HostApiError):
    """Raised on conflicts (existing branch, duplicate pull request, etc.)."""

    pass


class RateLimitedError(HostApiError):
    """Raised when rate limited."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        status_code: int | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, status_code, request_id)
        self.retry_after = retry_after


class ValidationError(HostApiError):
    """Raised on validation errors (422 and other 4xx)."""

    pass


class ServerError(HostApiError):
    """Raised on server errors (5xx) and exhausted connection retries."""

    pass


class GitCommandError(BackportError):
    """Raised when a local git command exits with a non-zero status."""

    def __init__(
        self,
        command: list[str],
        returncode: int,
        stderr: str = "",
        code: str = "GIT_COMMAND_FAILED",
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(code, f"`{' '.join(command)}` failed: {detail}")


class PatchApplyError(GitCommandError):
    """Raised when a three-way patch application fails."""

    def __init__(
        self,
        command: list[str],
        returncode: int,
        stderr: str = "",
        patch_index: int | None = None,
    ) -> None:
        super().__init__(command, returncode, stderr, code="PATCH_APPLY_FAILED")
        self.patch_index = patch_index
