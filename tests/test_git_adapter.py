import subprocess
from pathlib import Path

import pytest

from upgrade_checker.errors import ExternalToolError
from upgrade_checker.git_adapter import GitChangeSource, _run_git


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(
        args=["git"],
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
    )


def test_run_git_includes_stderr_details_on_failure(monkeypatch):
    monkeypatch.setattr(
        "upgrade_checker.git_adapter.subprocess.run",
        lambda *args, **kwargs: _completed(128, stderr="fatal: not a git repository"),
    )

    with pytest.raises(ExternalToolError) as excinfo:
        _run_git(["-C", "/tmp/nowhere", "status"])

    message = str(excinfo.value)
    assert "git -C /tmp/nowhere status" in message
    assert "fatal: not a git repository" in message


def test_run_git_wraps_missing_executable(monkeypatch):
    def fake_run(*args, **kwargs):
        raise FileNotFoundError("git")

    monkeypatch.setattr("upgrade_checker.git_adapter.subprocess.run", fake_run)

    with pytest.raises(ExternalToolError, match="failed to execute git"):
        _run_git(["status"])


def test_run_git_wraps_timeout(monkeypatch):
    def fake_run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr("upgrade_checker.git_adapter.subprocess.run", fake_run)

    with pytest.raises(ExternalToolError, match="timed out after 5"):
        _run_git(["status"], timeout=5)


def test_list_changed_paths_splits_output_in_order(monkeypatch):
    seen = {}

    def fake_run(cmd, **kwargs):
        seen["cmd"] = cmd
        seen["timeout"] = kwargs["timeout"]
        return _completed(stdout="x/a.go\nb.go\n")

    monkeypatch.setattr("upgrade_checker.git_adapter.subprocess.run", fake_run)

    paths = GitChangeSource(timeout=12).list_changed_paths("/work/target")

    assert paths == ["x/a.go", "b.go"]
    assert seen["cmd"] == [
        "git", "-c", "core.quotePath=false", "-C", "/work/target", "diff", "--name-only", "HEAD@{1}",
    ]
    assert seen["timeout"] == 12


def test_list_changed_paths_empty_output_means_no_changes(monkeypatch):
    monkeypatch.setattr(
        "upgrade_checker.git_adapter.subprocess.run",
        lambda *args, **kwargs: _completed(stdout="\n"),
    )

    assert GitChangeSource().list_changed_paths("/work/target") == []


def test_list_changed_paths_raises_when_git_fails(monkeypatch):
    monkeypatch.setattr(
        "upgrade_checker.git_adapter.subprocess.run",
        lambda *args, **kwargs: _completed(128, stderr="fatal: ambiguous argument 'HEAD@{1}'"),
    )

    with pytest.raises(ExternalToolError, match="HEAD@"):
        GitChangeSource().list_changed_paths("/work/target")


def test_fetch_diff_scopes_command_to_path(monkeypatch):
    seen = {}

    def fake_run(cmd, **kwargs):
        seen["cmd"] = cmd
        return _completed(stdout="@@ -1 +1 @@\n-a\n+b\n")

    monkeypatch.setattr("upgrade_checker.git_adapter.subprocess.run", fake_run)

    diff = GitChangeSource().fetch_diff("/work/target", "x/a.go")

    assert diff == "@@ -1 +1 @@\n-a\n+b\n"
    assert seen["cmd"] == [
        "git", "-c", "core.quotePath=false", "-C", "/work/target", "diff", "HEAD@{1}", "--", "x/a.go",
    ]


def test_fetch_diff_degrades_to_empty_on_failure(monkeypatch):
    monkeypatch.setattr(
        "upgrade_checker.git_adapter.subprocess.run",
        lambda *args, **kwargs: _completed(128, stderr="fatal: bad revision"),
    )

    assert GitChangeSource().fetch_diff("/work/target", "x/a.go") == ""


def test_fetch_diff_degrades_to_empty_on_timeout(monkeypatch):
    def fake_run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr("upgrade_checker.git_adapter.subprocess.run", fake_run)

    assert GitChangeSource(timeout=1).fetch_diff("/work/target", "x/a.go") == ""


def test_run_git_decodes_output_leniently(monkeypatch):
    seen = {}

    def fake_run(cmd, **kwargs):
        seen.update(kwargs)
        return _completed(stdout="ok")

    monkeypatch.setattr("upgrade_checker.git_adapter.subprocess.run", fake_run)

    _run_git(["status"])

    assert seen["encoding"] == "utf-8"
    assert seen["errors"] == "replace"


def _git(args, cwd: Path) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        text=True,
        capture_output=True,
        check=True,
    )


def _init_repo(repo: Path) -> None:
    repo.mkdir()
    _git(["init"], cwd=repo)
    _git(["config", "user.name", "git-upgrade-checker"], cwd=repo)
    _git(["config", "user.email", "git-upgrade-checker@example.com"], cwd=repo)


def test_fetch_diff_tolerates_non_utf8_file_contents(tmp_path):
    repo = tmp_path / "repo"
    _init_repo(repo)
    (repo / "latin1.txt").write_bytes(b"caf\xe9\n")
    _git(["add", "latin1.txt"], cwd=repo)
    _git(["commit", "-m", "base"], cwd=repo)
    (repo / "latin1.txt").write_bytes(b"na\xefve\n")
    _git(["commit", "-am", "update"], cwd=repo)

    source = GitChangeSource()
    diff = source.fetch_diff(str(repo), "latin1.txt")

    assert source.list_changed_paths(str(repo)) == ["latin1.txt"]
    assert "-caf\ufffd" in diff
    assert "+na\ufffdve" in diff


def test_list_changed_paths_keeps_non_ascii_names_unquoted(tmp_path):
    repo = tmp_path / "repo"
    _init_repo(repo)
    (repo / "café.go").write_text("package main\n", encoding="utf-8")
    _git(["add", "."], cwd=repo)
    _git(["commit", "-m", "base"], cwd=repo)
    (repo / "café.go").write_text("package main\n\nvar X = 1\n", encoding="utf-8")
    _git(["commit", "-am", "update"], cwd=repo)

    source = GitChangeSource()

    assert source.list_changed_paths(str(repo)) == ["café.go"]
    assert "+var X = 1" in source.fetch_diff(str(repo), "café.go")
