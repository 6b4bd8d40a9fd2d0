"""Tests for the logged command runner."""

from __future__ import annotations

import logging

import pytest

from edgecam_bootstrap.lib.command import RC_NOT_FOUND, CommandError, exit_status, format_argv, run_cmd


class TestRunCmd:
    def test_logs_quoted_command(self, fake_run, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO)
        run_cmd(["echo", "two words"])
        assert "CMD echo 'two words'" in caplog.text

    def test_dry_run_does_not_execute(self, fake_run) -> None:
        r = run_cmd(["sudo", "apt-get", "update"], dry_run=True)
        assert r.returncode == 0
        assert fake_run.calls == []

    def test_captures_output_by_default(self, fake_run) -> None:
        fake_run.respond(("cat",), stdout="hello\n")
        r = run_cmd(["cat"])
        assert r.stdout == "hello\n"
        assert fake_run.calls[0].kwargs["stdout"] is not None

    def test_uncaptured_inherits_terminal(self, fake_run) -> None:
        r = run_cmd(["apt", "install", "x"], capture=False)
        kwargs = fake_run.calls[0].kwargs
        assert kwargs["stdout"] is None and kwargs["stderr"] is None
        assert r.stdout == "" and r.stderr == ""

    def test_check_raises_with_returncode(self, fake_run) -> None:
        fake_run.respond(("false",), returncode=3)
        with pytest.raises(CommandError) as exc:
            run_cmd(["false"])
        assert exc.value.returncode == 3
        assert exc.value.argv == ["false"]

    def test_unchecked_failure_returns_result(self, fake_run) -> None:
        fake_run.respond(("false",), returncode=3)
        assert run_cmd(["false"], check=False).returncode == 3

    def test_missing_executable_is_127(self, fake_run) -> None:
        fake_run.missing.add("rustup")
        assert run_cmd(["rustup"], check=False).returncode == RC_NOT_FOUND
        with pytest.raises(CommandError) as exc:
            run_cmd(["rustup"])
        assert exc.value.returncode == RC_NOT_FOUND

    def test_env_overrides_are_merged(self, fake_run, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KEEP_ME", "1")
        run_cmd(["env"], env={"HOME": "/tmp/h"})
        env = fake_run.calls[0].env
        assert env["HOME"] == "/tmp/h"
        assert env["KEEP_ME"] == "1"

    def test_input_text_is_forwarded(self, fake_run) -> None:
        run_cmd(["sh"], input_text="echo hi\n")
        assert fake_run.calls[0].kwargs["input"] == "echo hi\n"


def test_format_argv_quotes_only_when_needed() -> None:
    assert format_argv(["curl", "--proto", "=https"]) == "curl --proto =https"
    assert format_argv(["a b"]) == "'a b'"


def test_exit_status_maps_signals_like_a_shell() -> None:
    assert exit_status(0) == 0
    assert exit_status(100) == 100
    assert exit_status(-9) == 137
