"""CLI tests: run gcloud-ssh as a subprocess in dry-run mode."""

from gcloud_ssh import __version__


def _env(tmp_path):
    return {"HOME": str(tmp_path), "GCLOUD_SSH_LOG_LEVEL": "INFO", "GCLOUD_SSH_CONFIG": ""}


def test_version(run_cli):
    rc, stdout, _ = run_cli("--version")
    assert rc == 0
    assert f"gcloud-ssh {__version__}" in stdout


def test_help_lists_options(run_cli):
    rc, stdout, _ = run_cli("--help")
    assert rc == 0
    for flag in ("--key-path", "--project", "--user", "--timeout", "--config", "--no-banner", "--dry-run"):
        assert flag in stdout


def test_dry_run_prints_gcloud_commands(run_cli, tmp_path):
    key = tmp_path / ".ssh" / "id_rsa"
    rc, stdout, stderr = run_cli("--dry-run", "--no-banner", "--key-path", str(key), "--project", "my-proj", env=_env(tmp_path))

    assert rc == 0, stderr
    assert "[dry-run] gcloud compute ssh-keys create --project my-proj" in stdout
    assert "[dry-run] gcloud compute instances list --format=json --project my-proj" in stdout
    assert "No VM instances found" in stdout
    assert "[dry-run] gcloud compute ssh" not in stdout.replace("ssh-keys", "")


def test_dry_run_existing_key_skips_keygen(run_cli, tmp_path):
    ssh_dir = tmp_path / ".ssh"
    ssh_dir.mkdir()
    (ssh_dir / "id_rsa.pub").write_text("ssh-ed25519 AAAA me@host\n")

    rc, stdout, _ = run_cli("--dry-run", "--no-banner", "--key-path", str(ssh_dir / "id_rsa"), env=_env(tmp_path))

    assert rc == 0
    assert "ssh-keys create" not in stdout
    assert "instances list" in stdout


def test_missing_config_file_exits(run_cli, tmp_path):
    rc, stdout, _ = run_cli("--dry-run", "--config", str(tmp_path / "missing.yaml"), env=_env(tmp_path))
    assert rc == 1
    assert "not found" in stdout


def test_bad_timeout_is_rejected(run_cli):
    rc, _, stderr = run_cli("--timeout", "soon")
    assert rc == 2
    assert "--timeout" in stderr
