"""Shell command execution helper."""

import logging
import shlex
import subprocess

from gcloud_ssh.provisioning.types import CommandResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120
JSON_FORMAT_FLAG = "--format=json"
DRY_RUN_JSON = "[]"


def run_shell_cmd(command, dry_run=False, timeout=DEFAULT_TIMEOUT):
    """Run a command and return a CommandResult (returncode, stdout, stderr).

    Args:
        command: list of command arguments
        dry_run: if True, log the command instead of executing; a command
            asking for ``--format=json`` then answers with an empty list
        timeout: maximum seconds to wait for the command

    A timeout or a missing executable is reported as returncode 1 with a
    diagnostic in stderr, the same way a failing command is. KeyboardInterrupt
    propagates after subprocess.run has killed the child.
    """
    printable = shlex.join(command)
    if dry_run:
        logger.info(f"[dry-run] {printable}")
        return CommandResult(0, DRY_RUN_JSON if JSON_FORMAT_FLAG in command else "", "")

    logger.debug(f"$ {printable}")
    try:
        result = subprocess.run(command, capture_output=True, text=True, timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.error(f"Command timed out after {timeout}s: {printable}")
        return CommandResult(1, "", f"Command timed out after {timeout}s")
    except FileNotFoundError:
        logger.error(f"Error: '{command[0]}' not found. Is it installed and on PATH?")
        return CommandResult(1, "", f"'{command[0]}' not found")

    if result.returncode != 0:
        logger.debug(f"exit {result.returncode}: {result.stderr.strip()}")
    return CommandResult(result.returncode, result.stdout or "", result.stderr or "")


def make_run_cmd(dry_run=False, timeout=DEFAULT_TIMEOUT):
    """Create a run_cmd callable bound to the run's dry-run and timeout settings."""

    def run_cmd(command):
        return run_shell_cmd(command, dry_run=dry_run, timeout=timeout)

    return run_cmd
