"""Custom exceptions for jsonc-edit.

TIER 0: No internal imports, only Python stdlib.
"""


class JsoncEditError(Exception):
    """Base exception for jsonc-edit."""

    pass


class JsoncParseError(JsoncEditError):
    """Document text is not valid JSONC."""

    def __init__(self, message: str, offset: int):
        self.offset = offset
        super().__init__(f"{message} at offset {offset}")


class JsoncPathError(JsoncEditError):
    """Path is malformed or cannot be written."""

    pass


class ConfigError(JsoncEditError):
    """Configuration error."""

    pass


class LimitError(JsoncEditError):
    """Input exceeded a size, depth or location limit."""

    pass
