"""MapCopier: installs bundle paths into the project according to setup_map."""

import os
from dataclasses import dataclass, field
from typing import List

from bvdb_installer.provision.path_ops import copy_path


@dataclass
class MapResult:
    """Outcome of one setup_map entry."""

    source: str
    destination: str
    copied: bool
    backups: List[str] = field(default_factory=list)


def _resolve(root, relative):
    return os.path.join(root, relative.lstrip("/"))


def apply_setup_map(bundle_root, project_root, setup_map, reporter):
    """Copy each mapped bundle path into the project, in declared order.

    Missing sources are skipped with an advisory. Copy failures propagate
    as OSError and abort the run.

    Returns:
        List of MapResult, one per entry
    """
    if not setup_map:
        reporter.advisory("No setup_map configured; nothing to copy.")
        return []

    results = []
    for relative_source, relative_destination in setup_map.items():
        source = _resolve(bundle_root, relative_source)
        destination = _resolve(project_root, relative_destination)

        if not os.path.exists(source):
            reporter.advisory(f"Skipping {relative_source} (not found in setup package)")
            results.append(MapResult(relative_source, relative_destination, copied=False))
            continue

        reporter.info(f"Installing {relative_source} -> {relative_destination}")
        backups = copy_path(source, destination)
        results.append(MapResult(relative_source, relative_destination, copied=True, backups=backups))

    if not any(result.copied for result in results):
        reporter.advisory(
            f"None of the {len(results)} setup_map entries were found in the setup package."
        )
    return results
