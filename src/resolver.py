"""Resolve the Cargo.toml path of a named package via `cargo metadata`."""

from __future__ import annotations

import logging
from typing import Optional

from common.logging_utils import extra_context, is_debug_enabled
from crate_metadata.errors import PackageNotFoundError
from crate_metadata.models import MetadataDocument, Package
from crate_metadata.schema import decode_output, parse_metadata
from crate_metadata.source import CargoMetadataSource, MetadataSource

logger = logging.getLogger(__name__)


def find_package(document: MetadataDocument, target_name: str) -> Package:
    """Return the first package whose name equals ``target_name`` exactly.

    Names are compared case-sensitively with no normalization, so "serde"
    never matches "serde_json" or "Serde". If several records share the
    name, the first one in emission order wins.

    Raises:
        PackageNotFoundError: If no record carries the name.
    """
    match: Optional[Package] = None
    for package in document.packages:
        if package.name != target_name:
            continue
        if match is None:
            match = package
        elif is_debug_enabled(logger):
            logger.debug(
                "Duplicate package name '%s' (%s); keeping first match %s",
                target_name, package.id, match.id,
                extra=extra_context(
                    event="decision", component="resolver", action="find_package",
                    outcome="first_match",
                ),
            )
    if match is None:
        if is_debug_enabled(logger):
            logger.debug(
                "No package named '%s' among: %s", target_name, ", ".join(document.package_names()),
                extra=extra_context(
                    event="decision", component="resolver", action="find_package",
                    outcome="not_found", count=len(document.packages),
                ),
            )
        raise PackageNotFoundError(target_name)
    return match


def load_metadata(source: MetadataSource) -> MetadataDocument:
    """Read, decode and parse metadata from ``source``."""
    return parse_metadata(decode_output(source.read()))


def resolve_package(target_name: str, source: Optional[MetadataSource] = None) -> Package:
    """Run the metadata pipeline and return the matching package record."""
    if source is None:
        source = CargoMetadataSource()
    document = load_metadata(source)
    package = find_package(document, target_name)
    logger.debug("Resolved %s %s -> %s", package.name, package.version, package.manifest_path)
    return package


def resolve(target_name: str, source: Optional[MetadataSource] = None) -> str:
    """Return the manifest path of the named package.

    Args:
        target_name: Package name to look up, e.g. "serde".
        source: Metadata source; a fresh CargoMetadataSource is used when omitted.

    Returns:
        The package's ``manifest_path`` exactly as cargo reported it.

    Raises:
        ProcessLaunchError, OutputDecodeError, SchemaParseError, PackageNotFoundError
    """
    return resolve_package(target_name, source).manifest_path


def get_crate_manifest_path(target_crate_name: str) -> str:
    """Return the manifest path of ``target_crate_name`` in the current Cargo project."""
    return resolve(target_crate_name)
