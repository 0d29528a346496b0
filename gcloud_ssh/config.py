"""Settings: defaults, optional YAML config file, CLI overrides."""

import logging
import os
import sys
from dataclasses import dataclass, fields

import yaml

from gcloud_ssh.provisioning.gcloud import GCLOUD_BIN
from gcloud_ssh.provisioning.keys import DEFAULT_KEY_PATH
from gcloud_ssh.provisioning.shell import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

CONFIG_ENV = "GCLOUD_SSH_CONFIG"
DEFAULT_CONFIG_PATH = "~/.config/gcloud-ssh/config.yaml"


@dataclass
class Settings:
    """Everything a run can be configured with."""

    key_path: str = DEFAULT_KEY_PATH
    gcloud_bin: str = GCLOUD_BIN
    project: str | None = None
    timeout: int = DEFAULT_TIMEOUT
    show_banner: bool = True
    tutorial: bool = True
    show_tips: bool = True

    @classmethod
    def from_dict(cls, d: dict) -> "Settings":
        """Build Settings from a config mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ValueError(f"Unknown config key(s): {', '.join(unknown)}")
        settings = cls(**d)
        if not isinstance(settings.timeout, int) or settings.timeout <= 0:
            raise ValueError(f"'timeout' must be a positive integer, got {settings.timeout!r}")
        return settings

    def with_overrides(self, **overrides) -> "Settings":
        """Copy with every non-None override applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return Settings.from_dict(values)


def _expand_path(path: str) -> str:
    """Expand user home directory and environment variables in path."""
    return os.path.expanduser(os.path.expandvars(path))


def load_config(config_path: str | None = None) -> dict:
    """Load the YAML config file.

    An explicitly given path (argument or GCLOUD_SSH_CONFIG) must exist;
    the default location is optional. Parse errors exit the process.
    """
    explicit = config_path or os.environ.get(CONFIG_ENV)
    path = _expand_path(explicit or DEFAULT_CONFIG_PATH)
    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except FileNotFoundError:
        if explicit:
            logger.error(f"Error: Config file '{path}' not found.")
            sys.exit(1)
        return {}
    except yaml.YAMLError as e:
        logger.error(f"Error parsing YAML config: {e}")
        sys.exit(1)

    if config is None:
        return {}
    if not isinstance(config, dict):
        logger.error(f"Error: Config file '{path}' must contain a mapping.")
        sys.exit(1)
    logger.debug(f"Loaded config from {path}")
    return config


def load_settings(config_path: str | None = None, **overrides) -> Settings:
    """Config file values, then CLI overrides on top."""
    try:
        return Settings.from_dict(load_config(config_path)).with_overrides(**overrides)
    except (TypeError, ValueError) as e:
        logger.error(f"Error in configuration: {e}")
        sys.exit(1)
