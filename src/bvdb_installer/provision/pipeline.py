"""ProvisioningPipeline: fetch, extract, patch, copy and configure a project.

States advance strictly in order. Any error moves the run to FAILED; the
scratch workspace is swept on every exit path before the error propagates.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from bvdb_installer.patch_cmd.text_patcher import replace_assignment
from bvdb_installer.provision.archive_extractor import extract_tar_gz
from bvdb_installer.provision.env_configurator import configure_env
from bvdb_installer.provision.errors import ConfigError
from bvdb_installer.provision.map_copier import MapResult, apply_setup_map
from bvdb_installer.provision.path_ops import ensure_dir, remove_quietly
from bvdb_installer.provision.reporter import Reporter

SCRATCH_DIR = ".bvdb"
ARCHIVE_NAME = "setup.tar.gz"
EXTRACT_DIR_NAME = "extracted"
BUNDLE_SUBDIR = "setup"
RESIDUAL_PATHS = (".security", ".env.bak")

WEB_DIR_CONFIG = os.path.join("config", "config.php")
WEB_DIR_PATTERN = r"""^\s*\$web_dir\s*=\s*\$root_dir\s*\.\s*['"]/public_html['"]\s*;\s*$"""
WEB_DIR_REPLACEMENT = "$web_dir    = $root_dir . '/public';"


class ProvisionState(Enum):
    INIT = "init"
    ARCHIVE_FETCHED = "archive_fetched"
    EXTRACTED = "extracted"
    ROOT_LOCATED = "root_located"
    CONFIG_PATCHED = "config_patched"
    FILES_MAPPED = "files_mapped"
    ENV_CONFIGURED = "env_configured"
    CLEANED_UP = "cleaned_up"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ProvisionDeps:
    """Injectable collaborators for a provisioning run."""

    fetcher: object
    answer_provider: object
    reporter: Reporter = field(default_factory=Reporter)


@dataclass
class ProvisionResult:
    """What a successful run did."""

    states: List[ProvisionState] = field(default_factory=list)
    map_results: List[MapResult] = field(default_factory=list)
    web_dir_updated: bool = False
    env_configured: bool = False


def locate_setup_root(extract_dir):
    """Prefer a nested setup/ directory; otherwise the extraction root itself."""
    candidate = os.path.join(extract_dir, BUNDLE_SUBDIR)
    if os.path.isdir(candidate):
        return candidate
    return extract_dir


def fix_config_web_dir(setup_root, reporter):
    """Point $web_dir at /public in the bundle's config/config.php.

    Returns True if the file was changed; a missing file or assignment is advisory.
    """
    config_path = os.path.join(setup_root, WEB_DIR_CONFIG)
    if not os.path.isfile(config_path):
        reporter.advisory("No config/config.php found in setup package; skipping web_dir update.")
        return False

    if not replace_assignment(config_path, WEB_DIR_PATTERN, WEB_DIR_REPLACEMENT):
        reporter.advisory("No web_dir assignment to update in config/config.php.")
        return False

    reporter.info("Updated web_dir in config/config.php to /public.")
    return True


class ProvisioningPipeline:
    """One linear provisioning run over <project_root>/.bvdb."""

    def __init__(self, project_root, config, deps):
        self._project_root = os.path.abspath(project_root)
        self._config = config
        self._deps = deps
        self._scratch_dir = os.path.join(self._project_root, SCRATCH_DIR)
        self._archive_path = os.path.join(self._scratch_dir, ARCHIVE_NAME)
        self._extract_dir = os.path.join(self._scratch_dir, EXTRACT_DIR_NAME)
        self._tar_path = None
        self._result = ProvisionResult(states=[ProvisionState.INIT])

    @property
    def state(self) -> ProvisionState:
        return self._result.states[-1]

    @property
    def result(self) -> ProvisionResult:
        return self._result

    def run(self) -> ProvisionResult:
        """Execute every step, then sweep the scratch workspace.

        Raises:
            ProvisionError: On configuration, download or extraction failure
            OSError: On any filesystem failure outside the cleanup sweep
        """
        try:
            self._run_steps()
        except Exception:
            self._advance(ProvisionState.FAILED)
            raise
        finally:
            self._cleanup()

        self._advance(ProvisionState.DONE)
        self._deps.reporter.info("Installation complete.")
        return self._result

    def _advance(self, state):
        self._result.states.append(state)

    def _run_steps(self):
        reporter = self._deps.reporter
        if not self._config.setup_url:
            raise ConfigError("No setup_url configured in composer.json extra.bvdb.setup_url.")

        ensure_dir(self._scratch_dir)
        reporter.info("Downloading setup archive…")
        archive = self._deps.fetcher.fetch(self._config.setup_url)
        with open(self._archive_path, "wb") as f:
            f.write(archive)
        self._advance(ProvisionState.ARCHIVE_FETCHED)

        reporter.info("Extracting setup archive…")
        self._tar_path = extract_tar_gz(self._archive_path, self._extract_dir)
        self._advance(ProvisionState.EXTRACTED)

        setup_root = locate_setup_root(self._extract_dir)
        self._advance(ProvisionState.ROOT_LOCATED)

        self._result.web_dir_updated = fix_config_web_dir(setup_root, reporter)
        self._advance(ProvisionState.CONFIG_PATCHED)

        self._result.map_results = apply_setup_map(
            setup_root, self._project_root, self._config.setup_map, reporter,
        )
        self._advance(ProvisionState.FILES_MAPPED)

        self._result.env_configured = configure_env(
            self._config.env_path(self._project_root),
            self._config,
            self._deps.fetcher,
            self._deps.answer_provider,
            reporter,
        )
        self._advance(ProvisionState.ENV_CONFIGURED)

    def _cleanup_targets(self):
        targets = [self._archive_path, self._tar_path, self._extract_dir, self._scratch_dir]
        targets.extend(os.path.join(self._project_root, name) for name in RESIDUAL_PATHS)
        return [target for target in targets if target]

    def _cleanup(self):
        for target in self._cleanup_targets():
            remove_quietly(target)
        if self.state != ProvisionState.FAILED:
            self._advance(ProvisionState.CLEANED_UP)
        self._deps.reporter.info("Cleaned up temporary files.")


def run_provisioning(project_root, config, deps) -> ProvisionResult:
    """Provision project_root from config using the injected collaborators."""
    return ProvisioningPipeline(project_root, config, deps).run()
