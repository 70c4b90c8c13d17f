"""ProvisionConfig: the immutable input of one provisioning run."""

import json
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from bvdb_installer.provision.errors import ConfigError

CONFIG_FILE_NAME = "composer.json"
CONFIG_SECTION = "bvdb"
ENV_MAP_KEY = ".env"
DEFAULT_ENV_PATH = ".env"

_URL_KEYS = ("setup_url", "salts_url", "licenses_url")


@dataclass(frozen=True)
class ProvisionConfig:
    """Archive source, content-block sources and the bundle -> project path map."""

    setup_url: str = ""
    salts_url: str = ""
    licenses_url: str = ""
    setup_map: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, data) -> "ProvisionConfig":
        """Build a config from the bvdb section of composer.json.

        Raises:
            ConfigError: If a value has the wrong type
        """
        if not isinstance(data, dict):
            raise ConfigError("The bvdb configuration must be a JSON object.")

        urls = {}
        for key in _URL_KEYS:
            value = data.get(key) or ""
            if not isinstance(value, str):
                raise ConfigError(f"{key} must be a string.")
            urls[key] = value.strip()

        raw_map = data.get("setup_map") or {}
        if not isinstance(raw_map, dict):
            raise ConfigError("setup_map must be a JSON object.")
        for source, destination in raw_map.items():
            if not isinstance(destination, str):
                raise ConfigError(f"setup_map entry {source!r} must map to a string.")

        return cls(setup_map=MappingProxyType(dict(raw_map)), **urls)

    def with_setup_url(self, setup_url: str) -> "ProvisionConfig":
        return ProvisionConfig(
            setup_url=setup_url,
            salts_url=self.salts_url,
            licenses_url=self.licenses_url,
            setup_map=self.setup_map,
        )

    def env_path(self, project_root: str) -> str:
        """Return the .env location, honouring a setup_map override for '.env'."""
        relative = self.setup_map.get(ENV_MAP_KEY, DEFAULT_ENV_PATH)
        return os.path.join(project_root, relative.lstrip("/"))


def load_provision_config(config_path: str) -> ProvisionConfig:
    """Read the extra.bvdb section of a composer-style JSON file.

    A document without an "extra" object is read as the bvdb section itself.

    Raises:
        ConfigError: If the file is missing or is not valid JSON
    """
    if not os.path.isfile(config_path):
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as err:
        raise ConfigError(f"Invalid JSON in {config_path}: {err}") from err

    if not isinstance(document, dict):
        raise ConfigError(f"{config_path} must contain a JSON object.")

    extra = document.get("extra")
    if isinstance(extra, dict):
        return ProvisionConfig.from_dict(extra.get(CONFIG_SECTION) or {})
    return ProvisionConfig.from_dict(document)
