"""Sources of raw `cargo metadata` output.

The resolver only needs "give me the metadata bytes". Running cargo is the
normal source; the static and file sources serve fixtures and output that
was captured ahead of time.
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import List, Optional, Protocol, Union

from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants
from crate_metadata.errors import ProcessLaunchError

logger = logging.getLogger(__name__)


class MetadataSource(Protocol):
    """Anything that can produce raw metadata bytes."""

    def read(self) -> bytes:
        ...


def default_cargo() -> str:
    """Return the cargo binary to run: $CARGO if set, else plain ``cargo``."""
    env_cargo = os.environ.get(Constants.ENV_CARGO)
    if env_cargo and env_cargo.strip():
        return env_cargo.strip()
    return Constants.CARGO_BINARY


class CargoMetadataSource:
    """Run ``cargo metadata --format-version=1`` and return its stdout."""

    def __init__(self, cargo: Optional[str] = None, cwd: Optional[str] = None):
        self.cargo = cargo or default_cargo()
        self.cwd = cwd

    def command(self) -> List[str]:
        return [self.cargo] + list(Constants.METADATA_ARGS)

    def read(self) -> bytes:
        """Run the command to completion and return the captured stdout.

        Raises:
            ProcessLaunchError: If cargo is missing, cannot be executed, or exits non-zero.
        """
        cmd = self.command()
        if is_debug_enabled(logger):
            logger.debug("Running: %s (cwd=%s)", " ".join(cmd), self.cwd or os.getcwd(), extra=extra_context(
                event="process_start", component="source", action="cargo_metadata",
            ))
        try:
            with Timer() as timer:
                result = subprocess.run(  # noqa: S603
                    cmd,
                    cwd=self.cwd,
                    capture_output=True,
                    check=False,
                )
        except FileNotFoundError as exc:
            raise ProcessLaunchError(f"Failed to execute `{' '.join(cmd)}`: command not found") from exc
        except PermissionError as exc:
            raise ProcessLaunchError(f"Failed to execute `{' '.join(cmd)}`: permission denied") from exc
        except OSError as exc:
            raise ProcessLaunchError(f"Failed to execute `{' '.join(cmd)}`: {exc}") from exc

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise ProcessLaunchError(
                f"`{' '.join(cmd)}` exited with status {result.returncode}",
                returncode=result.returncode,
                stderr=stderr,
            )
        if is_debug_enabled(logger):
            logger.debug("cargo metadata finished", extra=extra_context(
                event="process_exit", component="source", action="cargo_metadata",
                returncode=result.returncode, duration_ms=timer.duration_ms(), size=len(result.stdout),
            ))
        return result.stdout


class StaticMetadataSource:
    """Return a fixed payload; text is encoded as UTF-8."""

    def __init__(self, payload: Union[bytes, str]):
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        self.payload = payload

    def read(self) -> bytes:
        return self.payload


class FileMetadataSource:
    """Read metadata JSON previously saved from ``cargo metadata``."""

    def __init__(self, path: str):
        self.path = path

    def read(self) -> bytes:
        try:
            with open(self.path, "rb") as f:
                return f.read()
        except OSError as exc:
            raise ProcessLaunchError(f"Failed to read metadata file {self.path}: {exc}") from exc
