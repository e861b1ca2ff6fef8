from __future__ import annotations


class RootzMCPError(Exception):
    """Base error for the Rootz MCP server."""


class ValidationError(RootzMCPError):
    """Raised when user input is invalid."""


class InvalidPathError(ValidationError):
    """Raised when a requested file path is empty or unusable."""


class AccessDeniedError(InvalidPathError):
    """Raised when a path resolves outside the mirror root."""


class MissingParameterError(ValidationError):
    """Raised when a required tool argument is absent or empty."""


class UnknownToolError(RootzMCPError):
    """Raised when a tool name is not registered."""


class SyncError(RootzMCPError):
    """Raised when the mirror cannot be cloned or pulled."""


class NotFoundError(RootzMCPError):
    """Raised when a requested file is not found."""


class ReadError(RootzMCPError):
    """Raised when a file exists but cannot be read."""


class ParseError(RootzMCPError):
    """Raised when markup cannot be tokenized at all."""
