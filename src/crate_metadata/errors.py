"""Failure types for manifest resolution.

Every stage of the lookup pipeline has its own exception class so callers
can tell which stage failed without parsing messages.
"""

from __future__ import annotations

from typing import Optional


class ResolverError(Exception):
    """Base class for all manifest resolution failures."""

    stage = "resolve"


class ProcessLaunchError(ResolverError):
    """Raised when the metadata command cannot be run or exits non-zero."""

    stage = "launch"

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class OutputDecodeError(ResolverError):
    """Raised when the captured output is not valid UTF-8."""

    stage = "decode"


class SchemaParseError(ResolverError):
    """Raised when the output is not JSON or does not match the metadata schema."""

    stage = "parse"


class PackageNotFoundError(ResolverError):
    """Raised when no package record carries the requested name."""

    stage = "lookup"

    def __init__(self, name: str):
        super().__init__(f"Could not find package '{name}' in cargo metadata")
        self.name = name
