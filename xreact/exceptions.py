"""XReact exception classes."""

from __future__ import annotations

__all__ = [
    "CommandError",
    "ExecutableNotFoundError",
    "StageError",
    "ValidationError",
    "XReactError",
]


class XReactError(RuntimeError):
    """Base exception for XReact errors."""


class ValidationError(XReactError):
    """Raised when user supplied project settings are invalid."""


class StageError(XReactError):
    """Raised when a setup stage cannot continue with what it finds on disk."""


class ExecutableNotFoundError(XReactError):
    """Raised when the package manager (or git) is not on PATH."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"Executable {executable!r} not found.")
        self.executable = executable


class CommandError(XReactError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, command: list[str], return_code: int) -> None:
        super().__init__(f"Command {' '.join(command)!r} failed with return code {return_code}.")
        self.command = command
        self.return_code = return_code
