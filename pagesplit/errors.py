"""Exceptions raised by pagesplit; the CLI turns these into exit codes."""

from __future__ import annotations


class PageSplitError(Exception):
    """Base class for fatal pagesplit errors."""

    exit_code = 3


class InputNotFoundError(PageSplitError):
    """Raised when the PDF to split does not exist."""

    exit_code = 2


class OutputDirError(PageSplitError):
    """Raised when the output directory cannot be listed."""


class PromptAborted(PageSplitError):
    """Raised when stdin closes while waiting for a confirmation."""


class ConfigError(PageSplitError):
    """Raised for unreadable or malformed config files."""


class RasterizerNotFoundError(PageSplitError):
    """Raised when the cpdf executable is missing."""


class RasterizerLaunchError(PageSplitError):
    """Raised when the cpdf process could not be started."""


class RasterizerFailedError(PageSplitError):
    """Raised when cpdf exits with a non-zero status."""

    exit_code = 1

    def __init__(self, returncode: int, stdout: str, stderr: str) -> None:
        super().__init__(f"cpdf exited with status {returncode}")
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


__all__ = [
    "PageSplitError",
    "InputNotFoundError",
    "OutputDirError",
    "PromptAborted",
    "ConfigError",
    "RasterizerNotFoundError",
    "RasterizerLaunchError",
    "RasterizerFailedError",
]
