"""Data models for cargo metadata documents."""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class Package:
    """One dependency-graph node as emitted by `cargo metadata`."""
    name: str
    version: str
    id: str  # opaque package id, e.g. "registry+https://...#serde@1.0.200"
    manifest_path: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Package":
        """Build a Package from a validated record; unknown keys are ignored."""
        return cls(
            name=data["name"],
            version=data["version"],
            id=data["id"],
            manifest_path=data["manifest_path"],
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "version": self.version,
            "id": self.id,
            "manifest_path": self.manifest_path,
        }


@dataclass(frozen=True)
class MetadataDocument:
    """Parsed metadata; packages keep the order the tool emitted them in."""
    packages: Tuple[Package, ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MetadataDocument":
        return cls(packages=tuple(Package.from_dict(p) for p in data["packages"]))

    def package_names(self) -> List[str]:
        return [p.name for p in self.packages]
