"""Exceptions raised by skiller operations.

Missing or corrupt files on disk are never raised: scans skip them and the
ledgers fall back to their defaults. What remains are failures the caller has
to act on.
"""

from typing import Optional


class SkillerError(Exception):
    """Base class for all skiller errors."""


class DeactivationError(SkillerError):
    """Raised when one step of a deactivate/reactivate run fails.

    The disabled-skill ledger is left untouched, so the run can be retried.
    """
    def __init__(self, skill: str, step: str, cause: Optional[BaseException] = None, message: str = ""):
        self.skill = skill
        self.step = step
        self.cause = cause
        self.message = message or f"{step} failed for '{skill}': {cause}"
        super().__init__(self.message)


class CommandNotAvailableError(SkillerError):
    """Raised when the external skills command can't be found."""
    def __init__(self, command: str, message: str = ""):
        self.command = command
        self.message = message or (
            f"{command} is not available. Please install Node.js >= 18 to use skill management commands."
        )
        super().__init__(self.message)


class ExternalProcessError(SkillerError):
    """Raised when the external skills command fails or times out."""
    def __init__(
        self,
        command: list[str],
        exit_code: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
        timed_out: bool = False,
    ):
        self.command = command
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        self.timed_out = timed_out
        cmd = " ".join(command)
        if timed_out:
            self.message = f"Command timed out: {cmd}"
        else:
            output = (stdout or stderr).strip()
            self.message = f"Command failed with exit code {exit_code}: {cmd}"
            if output:
                self.message += f"\n{output}"
        super().__init__(self.message)


class SearchError(SkillerError):
    """Raised when the skill search API can't be reached or answers non-2xx."""
    retryable = True

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class SearchTimeoutError(SearchError):
    """Raised when the skill search API doesn't answer in time."""
    def __init__(self, message: str = "Search timed out. Please try again."):
        super().__init__(message)
