"""Custom exceptions for printflow."""


class PrintFlowError(Exception):
    """Base exception for all printflow errors."""

    exit_code: int = 1
    default_hint: str | None = None

    def __init__(self, message: str, hint: str | None = None):
        self.message = message
        self.hint = hint or self.default_hint
        super().__init__(message)


class BackupError(PrintFlowError):
    """A backup file was rejected; nothing was imported."""

    exit_code = 2
    default_hint = "Use a file produced by 'printflow export'"


class StorageError(PrintFlowError):
    """A storage slice could not be written."""

    exit_code = 3
