"""
ManifestWriter - aggregates a run's results into manifest.json.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Sequence

from componentgen.generation.contracts import GenerationResult, RunManifest

logger = logging.getLogger("componentgen.generation.manifest")


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ManifestWriter:
    """
    Builds and persists the RunManifest.

    Usage:
        writer = ManifestWriter()
        manifest = writer.build(results, package_path="./SmartHome")
        path = writer.write(manifest, output_dir)
    """

    def __init__(
        self,
        filename: str = "manifest.json",
        clock: Optional[Callable[[], str]] = None,
    ):
        """
        Args:
            filename: Manifest file name inside the output folder
            clock: Returns the "generated" timestamp (UTC ISO-8601 by default)
        """
        self.filename = filename
        self._clock = clock or _utc_timestamp

    def build(self, results: Sequence[GenerationResult], package_path: str) -> RunManifest:
        """Aggregate results, keeping their order."""
        successful = sum(1 for r in results if r.success)
        return RunManifest(
            generated=self._clock(),
            package_path=str(package_path),
            total_components=len(results),
            successful=successful,
            failed=len(results) - successful,
            components=[r.to_summary() for r in results],
        )

    def write(self, manifest: RunManifest, output_dir: Path) -> Path:
        """
        Write the manifest as indented JSON.

        Returns:
            Path of the written manifest
        """
        path = Path(output_dir) / self.filename
        path.write_text(json.dumps(manifest.to_dict(), indent=2), encoding="utf-8")
        logger.info(
            f"Manifest written to {path} "
            f"({manifest.successful} successful, {manifest.failed} failed)"
        )
        return path
