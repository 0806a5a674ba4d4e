"""Build orchestration: textbook namespace, then optional pass-through namespaces"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from cdnpub.config import Settings
from cdnpub.core.models import ChapterManifest
from cdnpub.core.namespace import PASSTHROUGH_NAMESPACES, TEXTBOOK, build_passthrough, build_textbook
from cdnpub.core.publish import VersionTarget, finalize_version, prepare_version


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NamespaceResult:
    """Summary of one namespace written by a build."""
    name: str
    version_dir: Path
    chapters: int
    sections: int


def _result(name: str, target: VersionTarget, manifests: list[ChapterManifest]) -> NamespaceResult:
    return NamespaceResult(
        name=name,
        version_dir=target.version_dir,
        chapters=len(manifests),
        sections=sum(len(m.sections) for m in manifests),
    )


def run_textbook(settings: Settings) -> NamespaceResult:
    """Clear the textbook version directory, build it, then write root manifest and locator."""
    target = prepare_version(settings.output_path / TEXTBOOK, settings.version)
    root, manifests = build_textbook(settings, target)
    finalize_version(target, root)
    logger.info("Namespace '%s' built -> %s", TEXTBOOK, target.version_dir)
    return _result(TEXTBOOK, target, manifests)


def run_passthrough(settings: Settings, namespace: str) -> NamespaceResult | None:
    """Build a pass-through namespace; None (nothing written) if its input dir is absent."""
    if not (settings.input_path / namespace).is_dir():
        logger.info("Namespace '%s' not found in %s; skipped", namespace, settings.input_path)
        return None
    target = prepare_version(settings.output_path / namespace, settings.version)
    root, manifests = build_passthrough(settings, namespace, target)
    finalize_version(target, root)
    logger.info("Namespace '%s' built -> %s", namespace, target.version_dir)
    return _result(namespace, target, manifests)


def run_build(settings: Settings) -> list[NamespaceResult]:
    """Run the whole build. Any BuildError aborts it; there is no partial-success mode."""
    t0 = time.monotonic()
    results = [run_textbook(settings)]
    for namespace in PASSTHROUGH_NAMESPACES:
        result = run_passthrough(settings, namespace)
        if result is not None:
            results.append(result)
    logger.info("Done in %dms (version %s)", (time.monotonic() - t0) * 1000, settings.version)
    return results
