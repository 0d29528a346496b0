"""Tests for the process runner."""

import sys

from gcloud_ssh.provisioning.shell import make_run_cmd, run_shell_cmd
from gcloud_ssh.provisioning.types import CommandResult


def _py(code):
    return [sys.executable, "-c", code]


def test_run_shell_cmd_captures_output():
    rc, stdout, stderr = run_shell_cmd(_py("import sys; print('out'); sys.stderr.write('err')"))
    assert rc == 0
    assert stdout == "out\n"
    assert stderr == "err"


def test_run_shell_cmd_nonzero_exit():
    result = run_shell_cmd(_py("import sys; sys.stderr.write('permission denied'); sys.exit(3)"))
    assert isinstance(result, CommandResult)
    assert result.returncode == 3
    assert not result.ok
    assert result.stderr == "permission denied"


def test_run_shell_cmd_timeout_is_a_failure(caplog):
    with caplog.at_level("ERROR"):
        rc, stdout, stderr = run_shell_cmd(_py("import time; time.sleep(10)"), timeout=0.5)
    assert rc == 1
    assert stdout == ""
    assert "timed out" in stderr
    assert "timed out" in caplog.text


def test_run_shell_cmd_missing_binary(caplog):
    with caplog.at_level("ERROR"):
        rc, _, stderr = run_shell_cmd(["definitely-not-a-real-gcloud-binary", "compute"])
    assert rc == 1
    assert "not found" in stderr
    assert "Is it installed and on PATH?" in caplog.text


def test_run_shell_cmd_dry_run(caplog):
    with caplog.at_level("INFO"):
        result = run_shell_cmd(["gcloud", "compute", "ssh", "web-1", "--command", "echo 'a b'"], dry_run=True)
    assert result == (0, "", "")
    assert "[dry-run] gcloud compute ssh web-1 --command" in caplog.text


def test_make_run_cmd_binds_dry_run(caplog):
    run_cmd = make_run_cmd(dry_run=True)
    with caplog.at_level("INFO"):
        assert run_cmd(["gcloud", "compute", "instances", "list"]).ok
    assert "[dry-run] gcloud compute instances list" in caplog.text


def test_run_shell_cmd_dry_run_json_command_answers_empty_list():
    result = run_shell_cmd(["gcloud", "compute", "instances", "list", "--format=json"], dry_run=True)
    assert result == (0, "[]", "")
