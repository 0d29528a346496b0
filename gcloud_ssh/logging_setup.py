"""CLI logging setup: plain %(message)s format, level from GCLOUD_SSH_LOG_LEVEL."""

import logging
import os
import sys

from gcloud_ssh.redact import SecretRedactingFilter

LOG_LEVEL_ENV = "GCLOUD_SSH_LOG_LEVEL"
DEFAULT_LEVEL = "INFO"


def resolve_log_level(value=None) -> int:
    """Map a level name (case-insensitive) to a logging level; unknown names mean INFO."""
    name = (value if value is not None else os.environ.get(LOG_LEVEL_ENV, DEFAULT_LEVEL)).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def setup_cli_logging(level=None):
    """Configure the root logger for CLI use.

    Messages go to stdout unadorned; at DEBUG every gcloud invocation and
    its failure output is shown as well.
    """
    root = logging.getLogger()
    root.setLevel(resolve_log_level(level))
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.addFilter(SecretRedactingFilter())
    root.addHandler(handler)
