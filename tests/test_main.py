"""Tests for the command line interface."""

from click.testing import CliRunner

from jupyterhub_exporter import __version__
from jupyterhub_exporter.main import cli


def test_help_lists_flags():
    result = CliRunner().invoke(cli, ["--help"])

    assert result.exit_code == 0
    for flag in ("--host", "--token", "--stop", "--hours", "--port", "--timeout"):
        assert flag in result.output


def test_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_users_prints_active_users(fake_hub):
    base_url = fake_hub(token="secret")

    result = CliRunner().invoke(cli, ["--host", base_url, "--token", "secret", "users"])

    assert result.exit_code == 0
    assert "alice" in result.output
    assert "bob" in result.output
    assert "carol" not in result.output
    assert "2 active user(s)" in result.output


def test_users_reads_token_from_environment(fake_hub):
    base_url = fake_hub(token="secret")

    result = CliRunner().invoke(
        cli, ["users"],
        env={"JUPYTERHUB_API_URL": base_url, "JUPYTERHUB_API_TOKEN": "secret"},
    )

    assert result.exit_code == 0
    assert "alice" in result.output


def test_users_no_active_users(fake_hub):
    base_url = fake_hub(payload=b'[{"name": "carol", "server": null, "last_activity": null}]')

    result = CliRunner().invoke(cli, ["--host", base_url, "--token", "x", "users"])

    assert result.exit_code == 0
    assert "No active users" in result.output


def test_users_fails_when_hub_unreachable(unused_url):
    result = CliRunner().invoke(cli, ["--host", unused_url, "--token", "x", "--timeout", "2", "users"])

    assert result.exit_code == 1


def test_users_handles_far_future_activity(fake_hub):
    body = b'[{"name": "alice", "server": "/user/alice/", "last_activity": "9999-12-31T23:59:59.999999Z"}]'
    base_url = fake_hub(payload=body)

    result = CliRunner().invoke(cli, ["--host", base_url, "--token", "x", "users"])

    assert result.exit_code == 0
    assert "9999-12-31 23:59:59 UTC" in result.output
