"""Push the local public key into an instance's authorized_keys."""

import logging
import shlex

from gcloud_ssh.errors import DeploymentError
from gcloud_ssh.provisioning.gcloud import GCLOUD_BIN, _gcloud_ssh_command_cmd
from gcloud_ssh.provisioning.types import DeploymentOutcome

logger = logging.getLogger(__name__)

REMOTE_SSH_DIR = "~/.ssh"
REMOTE_AUTHORIZED_KEYS = "~/.ssh/authorized_keys"

_FORBIDDEN_CHARS = {"\n": "newline", "\r": "carriage return", "\x00": "NUL byte"}


def build_remote_command(public_key):
    """Build the shell command that installs *public_key* on the remote host.

    Steps:
        1. Create ~/.ssh (mode 700)
        2. Terminate a last line left without a newline
        3. Append the key to authorized_keys unless an identical line exists
        4. Restrict authorized_keys to mode 600

    The key is passed through shlex.quote so it stays a single shell word,
    and written with printf '%s\\n' so backslashes and leading dashes are
    copied verbatim.

    Raises:
        DeploymentError: the key cannot be a single authorized_keys line.
    """
    if not public_key or not public_key.strip():
        raise DeploymentError("SSH public key is empty")
    for char, label in _FORBIDDEN_CHARS.items():
        if char in public_key:
            raise DeploymentError(f"SSH public key contains a {label}; expected a single line")

    key = shlex.quote(public_key)
    return (
        f"mkdir -p {REMOTE_SSH_DIR} && chmod 700 {REMOTE_SSH_DIR}"
        f" && touch {REMOTE_AUTHORIZED_KEYS}"
        f" && {{ [ ! -s {REMOTE_AUTHORIZED_KEYS} ] || [ -z \"$(tail -c1 {REMOTE_AUTHORIZED_KEYS})\" ]"
        f" || echo >> {REMOTE_AUTHORIZED_KEYS}; }}"
        f" && {{ grep -qxF -- {key} {REMOTE_AUTHORIZED_KEYS}"
        f" || printf '%s\\n' {key} >> {REMOTE_AUTHORIZED_KEYS}; }}"
        f" && chmod 600 {REMOTE_AUTHORIZED_KEYS}"
    )


def deploy_key(instance, public_key, run_cmd, project=None, gcloud_bin=GCLOUD_BIN) -> DeploymentOutcome:
    """Install *public_key* on *instance* via ``gcloud compute ssh --command``.

    Never retries: a half-applied permission change must be looked at by a human.
    """
    try:
        remote_cmd = build_remote_command(public_key)
    except DeploymentError as e:
        return DeploymentOutcome(succeeded=False, diagnostic=str(e))

    cmd = _gcloud_ssh_command_cmd(instance.name, instance.zone, remote_cmd, project, gcloud_bin=gcloud_bin)
    result = run_cmd(cmd)
    if not result.ok:
        logger.debug(f"Key copy to {instance.name} failed with exit {result.returncode}")
        diagnostic = result.stderr.strip() or f"gcloud exited with status {result.returncode}"
        return DeploymentOutcome(succeeded=False, diagnostic=diagnostic)

    return DeploymentOutcome(succeeded=True)
