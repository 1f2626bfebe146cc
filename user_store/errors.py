# ==============================================
# Errors
# ==============================================
#
# PURPOSE:
#   Every failure the record store can report. All of them are
#   terminal: nothing is retried, the invocation aborts and the
#   error reaches the caller (the CLI turns it into exit status 1).
#
# HIERARCHY:
# ----------
#   UserStoreError
#   ├── ValidationError
#   │   ├── MissingOperation
#   │   ├── UnknownOperation
#   │   ├── MissingFileName
#   │   ├── MissingItem
#   │   └── MissingId
#   ├── FileOpenError
#   ├── IOReadError
#   ├── ParseError
#   ├── IOWriteError       (rewriting the store failed)
#   └── InvalidItem        (only raised when strict item parsing is on)
#
# ==============================================


class UserStoreError(Exception):
    """Base class for all record store failures."""


class ValidationError(UserStoreError, ValueError):
    """Arguments are incomplete or name an unsupported operation."""


class MissingOperation(ValidationError):
    def __init__(self):
        super().__init__("-operation flag has to be specified")


class UnknownOperation(ValidationError):
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Operation {operation} not allowed!")


class MissingFileName(ValidationError):
    def __init__(self):
        super().__init__("-fileName flag has to be specified")


class MissingItem(ValidationError):
    def __init__(self):
        super().__init__("-item flag has to be specified")


class MissingId(ValidationError):
    def __init__(self):
        super().__init__("-id flag has to be specified")


class FileOpenError(UserStoreError):
    """The store file could not be opened (missing, a directory, no permission)."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        message = f"cannot open {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class IOReadError(UserStoreError):
    """The store file was opened but reading it failed."""


class ParseError(UserStoreError):
    """The store content is not a JSON array of user records."""


class InvalidItem(UserStoreError):
    """The -item argument is not a valid JSON user record."""


class IOWriteError(UserStoreError):
    """Rewriting the store file failed."""
