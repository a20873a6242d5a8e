"""Typed access to `cargo metadata` output."""

from crate_metadata.errors import (
    OutputDecodeError,
    PackageNotFoundError,
    ProcessLaunchError,
    ResolverError,
    SchemaParseError,
)
from crate_metadata.models import MetadataDocument, Package
from crate_metadata.schema import decode_output, parse_metadata
from crate_metadata.source import (
    CargoMetadataSource,
    FileMetadataSource,
    MetadataSource,
    StaticMetadataSource,
)

__all__ = [
    "CargoMetadataSource",
    "FileMetadataSource",
    "MetadataDocument",
    "MetadataSource",
    "OutputDecodeError",
    "Package",
    "PackageNotFoundError",
    "ProcessLaunchError",
    "ResolverError",
    "SchemaParseError",
    "StaticMetadataSource",
    "decode_output",
    "parse_metadata",
]
