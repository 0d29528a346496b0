"""Derive the final ssh command for a chosen instance."""

import getpass

from gcloud_ssh.errors import NoExternalAddressError


def resolve_local_username():
    """Local login name, as ssh would use it by default."""
    return getpass.getuser()


def compose_connection_command(instance, username):
    """Return ``ssh <username>@<external ip>`` for *instance*.

    Raises:
        NoExternalAddressError: the instance has no external IP.
    """
    if not instance.external_address:
        raise NoExternalAddressError(instance.name)
    return f"ssh {username}@{instance.external_address}"
