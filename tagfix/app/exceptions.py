"""
Exception hierarchy for tagfix.

The character remapping itself never raises; everything here belongs to the
file-processing side (configuration, backups, reading and writing tags).
"""


class TagFixException(Exception):
    """Base exception for all tagfix errors."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigurationError(TagFixException):
    """Configuration validation errors (bad options, inaccessible target)."""

    pass


class BackupError(TagFixException):
    """The pre-write copy of a file could not be made."""

    pass


class TagReadError(TagFixException):
    """A media file could not be opened or its tags parsed."""

    pass


class FieldWriteError(TagFixException):
    """A single tag field rejected its new value."""

    def __init__(self, key: str, value: str, message: str | None = None):
        super().__init__(message or f"Unable to set [{key}] = [{value}]", code="field")
        self.key = key
        self.value = value


class TagWriteError(TagFixException):
    """Tags could not be written back to the file."""

    pass
