"""Pytest configuration and shared fixtures for runnerinfo tests."""

import subprocess

import pytest

from runnerinfo.core.commands import CommandResult

CI_ENV_VARS = [
    "RUNNER_OS",
    "GITHUB_WORKSPACE",
    "INPUT_SHOW_EXTENDED_INFO",
    "GITHUB_REPOSITORY",
    "GITHUB_REF_NAME",
    "GITHUB_SHA",
    "JAVA_HOME",
    "GITHUB_OUTPUT",
]


class FakeRunner:
    """Command runner double that records calls and returns canned results.

    Responses are keyed by command name, or by ``(command, first_arg)`` for
    finer control. Unknown commands behave like a missing executable.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def __call__(self, command, args=(), cwd=None):
        args = list(args)
        self.calls.append((command, args))
        key = (command, args[0]) if args else (command, None)
        result = self.responses.get(key, self.responses.get(command))
        if result is None:
            return CommandResult(
                command=[command, *args],
                stderr=f"[Errno 2] No such file or directory: '{command}'",
                exit_code=127,
                launched=False,
            )
        return result

    def commands(self):
        return [command for command, _ in self.calls]


def ok(stdout="", stderr=""):
    """Build a successful CommandResult."""
    return CommandResult(stdout=stdout, stderr=stderr, exit_code=0)


def failed(stderr="error", exit_code=1):
    """Build a failed CommandResult."""
    return CommandResult(stderr=stderr, exit_code=exit_code)


@pytest.fixture
def fake_runner():
    """Factory for FakeRunner instances."""
    return FakeRunner


@pytest.fixture
def clean_env(monkeypatch):
    """Remove CI variables so tests never see the host's CI environment."""
    for var in CI_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def isolated_git_config(tmp_path, monkeypatch):
    """Point git's global config at a throwaway file."""
    config = tmp_path / "gitconfig"
    config.write_text("")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    return config


def _git(repo, *args):
    subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)


@pytest.fixture
def git_repo(tmp_path, isolated_git_config):
    """
    Create a real git repository with one commit and two tags at HEAD.

    Returns the repository path.
    """
    repo = tmp_path / "repo"
    repo.mkdir()

    _git(repo, "init")
    _git(repo, "config", "user.name", "Test User")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "commit.gpgsign", "false")
    _git(repo, "config", "tag.gpgsign", "false")

    (repo / "test.txt").write_text("test")
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "Initial commit\n\nSecond paragraph")
    _git(repo, "tag", "v1.0.0")
    _git(repo, "tag", "latest")

    return repo
