"""Tests for the run orchestrator: exit codes, ordering, skipping, aggregation."""

from unittest.mock import patch

import pytest

from githooks.core.errors import GitError, NotARepository
from githooks.hooks import BuiltIn, ExternalCommand, HookDefinition
from githooks.run import run, run_hooks


def _cmd(hook_id: str, command: str, **kw) -> HookDefinition:
    return HookDefinition(id=hook_id, run=ExternalCommand(command), **kw)


@pytest.fixture
def repo(tmp_path):
    """A fake repository root: git lookups are patched to point at tmp_path."""
    with (
        patch("githooks.run.get_git_root", return_value=tmp_path),
        patch("githooks.run.select_files", return_value=[]) as select,
    ):
        yield tmp_path, select


def _write(root, text):
    (root / "githooks.yml").write_text(text)


# ── run_hooks ───────────────────────────────────────────────────────


class TestRunHooks:
    def test_sequential_in_declared_order(self, tmp_path):
        hooks = [
            _cmd("one", "echo one >> log.txt"),
            _cmd("two", "echo two >> log.txt"),
            _cmd("three", "echo three >> log.txt"),
        ]
        report = run_hooks("pre-push", hooks, [], tmp_path)
        assert (tmp_path / "log.txt").read_text().split() == ["one", "two", "three"]
        assert [label for label, _ in report.results] == ["one", "two", "three"]
        assert report.success is True

    def test_failure_does_not_stop_later_hooks(self, tmp_path):
        hooks = [
            _cmd("first", "echo first >> log.txt"),
            _cmd("second", "exit 1"),
            _cmd("third", "echo third >> log.txt"),
        ]
        report = run_hooks("pre-push", hooks, [], tmp_path)
        assert (tmp_path / "log.txt").read_text().split() == ["first", "third"]
        assert report.failed == ["second"]
        assert report.exit_code == 1

    def test_skips_gated_hook_without_matches(self, tmp_path):
        hooks = [_cmd("ts-only", "exit 1", glob="*.ts", pass_filenames=True)]
        report = run_hooks("pre-commit", hooks, ["README.md"], tmp_path)
        assert report.results == []
        assert report.skipped == ["ts-only"]
        assert report.success is True

    def test_runs_gated_hook_without_pass_filenames(self, tmp_path):
        hooks = [_cmd("ts-only", "echo ran > marker", glob="*.ts")]
        report = run_hooks("pre-commit", hooks, ["README.md"], tmp_path)
        assert (tmp_path / "marker").exists()
        assert len(report.results) == 1

    def test_only_matched_files_are_passed(self, tmp_path):
        (tmp_path / "a.ts").write_text("a")
        hooks = [_cmd("list", "echo >> seen.txt", glob="*.ts", pass_filenames=True)]
        run_hooks("pre-commit", hooks, ["a.ts", "b.md"], tmp_path)
        assert (tmp_path / "seen.txt").read_text().split() == ["a.ts"]

    def test_non_file_trigger_runs_without_files(self, tmp_path):
        hooks = [_cmd("test", "echo ran > marker", pass_filenames=True)]
        report = run_hooks("pre-push", hooks, [], tmp_path)
        assert (tmp_path / "marker").exists()
        assert report.success is True

    def test_builtin_without_matches_checks_no_files(self, tmp_path):
        hooks = [HookDefinition(id="lint", run=BuiltIn("lint-check"), glob="*.py")]
        with patch("githooks.hooks.builtins.run_process") as proc:
            report = run_hooks("pre-commit", hooks, ["README.md"], tmp_path)
        proc.assert_not_called()
        assert report.success is True
        assert report.results[0][1].message == "no matching files"

    def test_builtin_gets_only_matched_files(self, tmp_path):
        hooks = [HookDefinition(id="lint", run=BuiltIn("lint-check"), glob="*.py")]
        with patch("githooks.hooks.builtins.run_process", return_value=(0, "", "")) as proc:
            run_hooks("pre-commit", hooks, ["a.py", "README.md"], tmp_path)
        assert proc.call_args.args[0][-2:] == ["check", "a.py"]

    def test_builtin_on_non_file_trigger_checks_project(self, tmp_path):
        hooks = [HookDefinition(id="lint", run=BuiltIn("lint-check"), glob="*.py")]
        with patch("githooks.hooks.builtins.run_process", return_value=(0, "", "")) as proc:
            run_hooks("pre-push", hooks, [], tmp_path)
        assert proc.call_args.args[0][-2:] == ["check", "."]

    def test_restage_after_success(self, tmp_path):
        hooks = [_cmd("fix", "true", glob="*.py", pass_filenames=True, restage=True)]
        with patch("githooks.run.stage_files") as stage:
            run_hooks("pre-commit", hooks, ["a.py", "b.md"], tmp_path)
        stage.assert_called_once_with(tmp_path, ["a.py"])

    def test_no_restage_after_failure(self, tmp_path):
        hooks = [_cmd("fix", "false", restage=True)]
        with patch("githooks.run.stage_files") as stage:
            run_hooks("pre-commit", hooks, ["a.py"], tmp_path)
        stage.assert_not_called()

    def test_no_restage_by_default(self, tmp_path):
        hooks = [_cmd("fix", "true")]
        with patch("githooks.run.stage_files") as stage:
            run_hooks("pre-commit", hooks, ["a.py"], tmp_path)
        stage.assert_not_called()

    def test_restage_error_fails_hook(self, tmp_path):
        hooks = [_cmd("fix", "true", restage=True)]
        with patch("githooks.run.stage_files", side_effect=GitError("index.lock exists")):
            report = run_hooks("pre-commit", hooks, ["a.py"], tmp_path)
        assert report.failed == ["fix"]
        assert "index.lock" in report.results[0][1].message


# ── run ─────────────────────────────────────────────────────────────


class TestRun:
    def test_not_a_repository(self, tmp_path, capsys):
        with patch("githooks.run.get_git_root", side_effect=NotARepository("not a git repo")):
            assert run("pre-commit", cwd=tmp_path) == 1
        assert "not a git repo" in capsys.readouterr().err

    def test_no_config(self, repo, capsys):
        assert run("pre-commit") == 1
        assert "No configuration found" in capsys.readouterr().err

    def test_invalid_config_runs_nothing(self, repo, capsys):
        root, _ = repo
        _write(
            root,
            "hooks:\n  pre-push:\n    - id: ok\n      run: echo ran > marker\n    - id: broken\n",
        )
        assert run("pre-push") == 1
        assert not (root / "marker").exists()
        assert "missing required 'run'" in capsys.readouterr().err

    def test_no_hooks_for_trigger(self, repo, capsys):
        root, _ = repo
        _write(root, "hooks:\n  pre-push:\n    - id: t\n      run: 'true'\n")
        assert run("commit-msg") == 0
        assert "No hooks configured for commit-msg" in capsys.readouterr().out

    def test_no_staged_files(self, repo, capsys):
        root, select = repo
        _write(root, "hooks:\n  pre-commit:\n    - id: t\n      run: echo ran > marker\n")
        select.return_value = []
        assert run("pre-commit") == 0
        assert not (root / "marker").exists()
        assert "No staged files" in capsys.readouterr().out

    def test_all_pass(self, repo, capsys):
        root, select = repo
        _write(root, "hooks:\n  pre-commit:\n    - id: ok\n      run: 'true'\n")
        select.return_value = ["a.py"]
        assert run("pre-commit") == 0
        out = capsys.readouterr().out
        assert "✓ ok" in out
        assert "All hooks passed!" in out

    def test_failure_report(self, repo, capsys):
        root, _ = repo
        _write(
            root,
            "hooks:\n"
            "  pre-push:\n"
            "    - id: first\n      run: 'true'\n"
            "    - id: second\n      name: Second check\n      run: echo broken; exit 1\n"
            "    - id: third\n      run: echo third > marker\n",
        )
        assert run("pre-push") == 1
        assert (root / "marker").exists()
        captured = capsys.readouterr()
        assert "✓ first" in captured.out
        assert "✗ Second check" in captured.err
        assert "broken" in captured.err
        assert "1 hook(s) failed" in captured.err
        assert "  - Second check" in captured.err

    def test_unexpected_error(self, repo, capsys):
        root, _ = repo
        _write(root, "hooks:\n  pre-push:\n    - id: t\n      run: 'true'\n")
        with patch("githooks.run.run_hooks", side_effect=RuntimeError("disk on fire")):
            assert run("pre-push") == 1
        assert "unexpected failure: disk on fire" in capsys.readouterr().err

    def test_label_with_markup_characters(self, repo, capsys):
        root, _ = repo
        _write(root, "hooks:\n  pre-push:\n    - id: t\n      name: '[bold]x'\n      run: 'true'\n")
        assert run("pre-push") == 0
        assert "[bold]x" in capsys.readouterr().out
