"""Versioned output layout: version directory clearing, root manifest and latest locator"""

from dataclasses import dataclass
from pathlib import Path

from cdnpub.core.models import Locator, RootManifest
from cdnpub.core.utils.fs import clean_dir, ensure_dir, write_json


INDEX_FILE = "index.json"
LATEST_DIR = "latest"


@dataclass(frozen=True)
class VersionTarget:
    """Output location of one namespace build: {base}/v{version} plus {base}/latest."""
    base: Path
    version: str

    @property
    def version_dir(self) -> Path:
        return self.base / f"v{self.version}"

    @property
    def latest_dir(self) -> Path:
        return self.base / LATEST_DIR

    @property
    def locator(self) -> Locator:
        return Locator(version=self.version, index=f"../v{self.version}/{INDEX_FILE}")


def prepare_version(base: Path, version: str) -> VersionTarget:
    """Clear {base}/v{version} (never merged) and ensure {base}/latest exists.

    The latest directory is created if absent but never cleared.
    """
    target = VersionTarget(base=base, version=version)
    clean_dir(target.version_dir)
    ensure_dir(target.latest_dir)
    return target


def finalize_version(target: VersionTarget, root: RootManifest) -> Path:
    """Write the root manifest, then point latest/index.json at it. Returns the root path."""
    root_path = write_json(target.version_dir / INDEX_FILE, root.model_dump(mode="json"))
    write_json(target.latest_dir / INDEX_FILE, target.locator.model_dump(mode="json"))
    return root_path
