"""Local SSH key pair: check, generate via gcloud, read the public half."""

import logging
import os
from pathlib import Path

from gcloud_ssh.errors import KeyGenerationError, KeyPairError
from gcloud_ssh.provisioning.gcloud import GCLOUD_BIN, _gcloud_create_ssh_key_cmd
from gcloud_ssh.provisioning.types import KeyPair

logger = logging.getLogger(__name__)

DEFAULT_KEY_PATH = "~/.ssh/id_rsa"


def key_pair_at(private_path) -> KeyPair:
    """Describe the key pair at *private_path* without touching anything."""
    private = Path(os.path.expanduser(str(private_path)))
    public = private.with_name(private.name + ".pub")
    # The public half is enough; the private key is assumed to sit next to it.
    return KeyPair(private_path=private, public_path=public, exists=public.is_file())


def _ensure_ssh_dir(ssh_dir: Path) -> None:
    if ssh_dir.is_dir():
        return
    logger.info(f"Creating {ssh_dir} directory...")
    try:
        ssh_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
        os.chmod(ssh_dir, 0o700)
    except OSError as e:
        raise KeyPairError(f"Failed to create {ssh_dir}: {e}") from e


def ensure_key_pair(private_path, run_cmd, project=None, gcloud_bin=GCLOUD_BIN, dry_run=False) -> KeyPair:
    """Make sure a key pair exists at *private_path*, generating one if absent.

    Returns the KeyPair. When the public key is already present no command
    is run, so repeated calls are free. A dry run only prints the keygen
    command, so nothing is checked afterwards.

    Raises:
        KeyPairError: the ssh directory could not be created.
        KeyGenerationError: gcloud exited with a non-zero status, or left no
            public key at the expected path.
    """
    pair = key_pair_at(private_path)
    if pair.exists:
        logger.debug(f"SSH key pair already exists at {pair.public_path}")
        return pair

    _ensure_ssh_dir(pair.private_path.parent)

    result = run_cmd(_gcloud_create_ssh_key_cmd(project, gcloud_bin=gcloud_bin))
    if not result.ok:
        raise KeyGenerationError(result.stderr)

    if dry_run:
        return pair
    generated = key_pair_at(private_path)
    if not generated.exists:
        raise KeyGenerationError(f"gcloud reported success but {generated.public_path} was not created")
    return generated


def read_public_key(pair: KeyPair) -> str:
    """Return the public key line, stripped of surrounding whitespace."""
    try:
        return pair.public_path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        raise KeyPairError(f"Failed to read SSH public key {pair.public_path}: {e}") from e
