"""Tests for git repository inspection."""

import subprocess

from conftest import failed, ok

from runnerinfo.core.commands import ProbeStatus
from runnerinfo.core.config import RunContext
from runnerinfo.core.repository import (
    RepositoryInspector,
    collect_repository_info,
    join_tags,
)


def git_output(repo, *args):
    return subprocess.run(
        ["git", *args], cwd=repo, check=True, capture_output=True, text=True
    ).stdout.strip()


class TestJoinTags:
    def test_multiple_tags(self):
        assert join_tags("v1.0.0\nlatest\n") == "v1.0.0,latest"

    def test_blank_lines_skipped(self):
        assert join_tags("\nv2\n\n") == "v2"


class TestRepositoryInspectorWithGit:
    """Test against a real git repository fixture."""

    def test_commit_metadata(self, git_repo):
        info = collect_repository_info(RunContext(workspace=git_repo))
        full_sha = git_output(git_repo, "rev-parse", "HEAD")

        assert info.commit_sha.value == full_sha
        assert info.short_sha.value == full_sha[:7]
        assert info.author.value == "Test User <test@example.com>"
        assert info.branch.value == git_output(
            git_repo, "rev-parse", "--abbrev-ref", "HEAD"
        )
        assert info.message.value == "Initial commit\n\nSecond paragraph"

    def test_tags_at_head(self, git_repo):
        info = collect_repository_info(RunContext(workspace=git_repo))
        expected = ",".join(git_output(git_repo, "tag", "--points-at", "HEAD").split("\n"))

        assert info.tags.value == expected
        assert set(info.tags.value.split(",")) == {"v1.0.0", "latest"}

    def test_commit_date_format(self, git_repo):
        info = collect_repository_info(RunContext(workspace=git_repo))
        # e.g. "2024-03-05 07:02:09 UTC" (zone name depends on the host)
        date_part = info.commit_date.value[:19]
        assert date_part[4] == "-" and date_part[10] == " " and date_part[13] == ":"

    def test_no_remote(self, git_repo):
        info = collect_repository_info(RunContext(workspace=git_repo))

        assert info.remote_url.status == ProbeStatus.FAILED
        assert "  REMOTE URL:       N/A" in info.render()

    def test_with_remote(self, git_repo):
        subprocess.run(
            ["git", "remote", "add", "origin", "https://github.com/user/repo.git"],
            cwd=git_repo,
            check=True,
            capture_output=True,
        )

        info = collect_repository_info(RunContext(workspace=git_repo))

        assert info.remote_url.value == "https://github.com/user/repo.git"

    def test_safe_directory_added(self, git_repo, isolated_git_config):
        info = collect_repository_info(RunContext(workspace=git_repo))

        assert info.safe_directory == str(git_repo)
        assert info.warnings == []
        assert str(git_repo) in isolated_git_config.read_text()
        assert f"✅ Added {git_repo} to git safe.directory" in info.render()

    def test_ci_values_preferred(self, git_repo):
        """Test CI-provided ref and SHA win over git queries."""
        context = RunContext(
            workspace=git_repo,
            repository="octo/repo",
            ref_name="release/1.x",
            sha="0123456789abcdef0123456789abcdef01234567",
        )

        info = collect_repository_info(context)

        assert info.repository.value == "octo/repo"
        assert info.branch.value == "release/1.x"
        assert info.short_sha.value == "0123456"

    def test_not_a_git_repo(self, tmp_path, isolated_git_config):
        """Test every git query degrades independently outside a repo."""
        plain = tmp_path / "plain"
        plain.mkdir()

        info = collect_repository_info(RunContext(workspace=plain))

        for field in (info.branch, info.commit_sha, info.author, info.tags):
            assert field.status == ProbeStatus.FAILED
        lines = info.render()
        assert "  SHORT SHA:        N/A" in lines
        assert "  TAGS AT HEAD:     N/A" in lines


class TestRepositoryInspectorWithFakes:
    """Test call-site handling with a fake command runner."""

    def test_missing_workspace_warns_and_skips(self, fake_runner):
        runner = fake_runner()

        info = RepositoryInspector(RunContext(), runner=runner).collect()

        assert info.safe_directory is None
        assert info.warnings == [
            "GITHUB_WORKSPACE not set. Skipping git safe.directory configuration."
        ]
        assert all(args[0] != "config" for _, args in runner.calls)

    def test_repository_skipped_without_ci_value(self, fake_runner, tmp_path):
        info = RepositoryInspector(
            RunContext(workspace=tmp_path), runner=fake_runner()
        ).collect()

        assert info.repository.status == ProbeStatus.SKIPPED
        assert "  REPOSITORY:       N/A" in info.render()

    def test_safe_directory_failure_is_warning(self, fake_runner, tmp_path):
        runner = fake_runner({("git", "config"): failed("could not lock config file")})

        info = RepositoryInspector(RunContext(workspace=tmp_path), runner=runner).collect()

        assert info.safe_directory is None
        assert len(info.warnings) == 1
        assert "could not lock config file" in info.warnings[0]

    def test_git_absent(self, fake_runner, tmp_path):
        """Test a missing git binary yields N/A everywhere without raising."""
        info = RepositoryInspector(
            RunContext(workspace=tmp_path), runner=fake_runner()
        ).collect()

        assert info.commit_sha.display() == "N/A"
        assert info.short_sha.display() == "N/A"
        assert info.remote_url.display() == "N/A"
        assert "    N/A" in info.render()

    def test_one_failure_does_not_block_others(self, fake_runner, tmp_path):
        runner = fake_runner(
            {
                ("git", "config"): ok(),
                ("git", "rev-parse"): failed("fatal"),
                ("git", "log"): ok("Jane <jane@example.com>"),
                ("git", "remote"): ok("git@example.com:a/b.git"),
                ("git", "tag"): ok(""),
            }
        )

        info = RepositoryInspector(RunContext(workspace=tmp_path), runner=runner).collect()

        assert info.commit_sha.status == ProbeStatus.FAILED
        assert info.author.value == "Jane <jane@example.com>"
        assert info.remote_url.value == "git@example.com:a/b.git"
        assert info.tags.status == ProbeStatus.EMPTY
        assert info.tags.display() == "N/A"
        assert len([c for c, _ in runner.calls if c == "git"]) == 8

    def test_message_rendered_as_block(self, fake_runner, tmp_path):
        runner = fake_runner({"git": ok("Fix bug\n\nDetails here")})

        info = RepositoryInspector(RunContext(workspace=tmp_path), runner=runner).collect()
        lines = info.render()

        index = lines.index("  COMMIT MESSAGE:")
        assert lines[index + 1] == "    Fix bug\n    \n    Details here"
