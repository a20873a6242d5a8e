"""Decoding and JSON Schema validation for `cargo metadata` output.

Only the fields the resolver reads are required. Everything else the tool
emits (workspace members, resolve graph, targets, features, ...) is
accepted and ignored so newer cargo releases keep parsing.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Tuple

from jsonschema import Draft7Validator

from crate_metadata.errors import OutputDecodeError, SchemaParseError
from crate_metadata.models import MetadataDocument

logger = logging.getLogger(__name__)

PACKAGE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["name", "version", "id", "manifest_path"],
    "properties": {
        "name": {"type": "string"},
        "version": {"type": "string"},
        "id": {"type": "string"},
        "manifest_path": {"type": "string"},
    },
    "additionalProperties": True,
}

METADATA_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["packages"],
    "properties": {
        "packages": {"type": "array", "items": PACKAGE_SCHEMA},
    },
    "additionalProperties": True,
}

_VALIDATOR = Draft7Validator(METADATA_SCHEMA)


def decode_output(raw: bytes) -> str:
    """Decode captured process output as strict UTF-8.

    Args:
        raw: Bytes captured from the metadata command's stdout.

    Returns:
        The decoded text.

    Raises:
        OutputDecodeError: If the bytes are not valid UTF-8.
    """
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise OutputDecodeError(
            f"Failed to decode cargo metadata output as UTF-8 at byte {exc.start}: {exc.reason}"
        ) from exc


def validate_metadata(data: Any) -> None:
    """Validate a decoded JSON value and raise on the first error."""
    try:
        errs = sorted(_VALIDATOR.iter_errors(data), key=lambda e: list(e.path))
    except RecursionError as exc:
        raise SchemaParseError("Invalid metadata: nesting too deep to validate") from exc
    if errs:
        first = errs[0]
        path = "/".join([str(p) for p in first.path])
        raise SchemaParseError(f"Invalid metadata at '{path}': {first.message}")


def _reject_duplicate_keys(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    obj: Dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise ValueError(f"duplicate field `{key}`")
        obj[key] = value
    return obj


def parse_metadata(text: str) -> MetadataDocument:
    """Deserialize metadata text into a MetadataDocument.

    Raises:
        SchemaParseError: If the text is not JSON, repeats a key within one object,
            nests too deeply, or does not match METADATA_SCHEMA.
    """
    try:
        data = json.loads(text, object_pairs_hook=_reject_duplicate_keys)
    except (ValueError, RecursionError) as exc:
        raise SchemaParseError(f"Failed to deserialize cargo metadata: {exc}") from exc

    validate_metadata(data)
    document = MetadataDocument.from_dict(data)
    logger.debug("Parsed cargo metadata with %d packages", len(document.packages))
    return document
