"""gcloud command templates used by the provisioning steps."""

GCLOUD_BIN = "gcloud"


# ── Command builders ───────────────────────────────────────────────


def _with_project(cmd, project):
    if project:
        cmd.extend(["--project", project])
    return cmd


def _gcloud_create_ssh_key_cmd(project=None, gcloud_bin=GCLOUD_BIN):
    """Build gcloud command to generate the local SSH key pair."""
    return _with_project([gcloud_bin, "compute", "ssh-keys", "create"], project)


def _gcloud_list_instances_cmd(project=None, gcloud_bin=GCLOUD_BIN):
    """Build gcloud command to list instances as JSON."""
    return _with_project([gcloud_bin, "compute", "instances", "list", "--format=json"], project)


def _gcloud_ssh_command_cmd(instance, zone, command, project=None, gcloud_bin=GCLOUD_BIN):
    """Build gcloud command to run a single shell command on an instance."""
    cmd = [
        gcloud_bin,
        "compute",
        "ssh",
        instance,
        "--zone",
        zone,
        "--command",
        command,
    ]
    return _with_project(cmd, project)
