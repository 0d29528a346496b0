"""SSH provisioning steps: key pair, instance catalog, key deployment, ssh command."""

from gcloud_ssh.provisioning.catalog import list_instances, parse_instances
from gcloud_ssh.provisioning.connection import compose_connection_command, resolve_local_username
from gcloud_ssh.provisioning.deployer import build_remote_command, deploy_key
from gcloud_ssh.provisioning.keys import ensure_key_pair, read_public_key
from gcloud_ssh.provisioning.shell import make_run_cmd, run_shell_cmd
from gcloud_ssh.provisioning.types import (
    CommandResult,
    DeploymentOutcome,
    Instance,
    KeyPair,
    Selection,
    SelectionStatus,
)

__all__ = [
    "CommandResult",
    "DeploymentOutcome",
    "Instance",
    "KeyPair",
    "Selection",
    "SelectionStatus",
    "run_shell_cmd",
    "make_run_cmd",
    "ensure_key_pair",
    "read_public_key",
    "list_instances",
    "parse_instances",
    "build_remote_command",
    "deploy_key",
    "compose_connection_command",
    "resolve_local_username",
]
