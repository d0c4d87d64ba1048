"""CLI core stories: traceback handling, main entry, help, info, version and --set."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click
import lib_cli_exit_tools
import pytest
from click.testing import CliRunner, Result

from courier import __init__conf__
from courier.adapters import cli as cli_mod
from courier.adapters.cli.context import CLIContext, get_cli_context
from courier.composition import build_production, build_testing


def _fail() -> None:
    raise RuntimeError("I should fail")


@pytest.mark.os_agnostic
def test_snapshot_traceback_state_returns_disabled_by_default(managed_traceback_state: None) -> None:
    assert cli_mod.snapshot_traceback_state() == (False, False)


@pytest.mark.os_agnostic
def test_apply_traceback_preferences_enables_both_flags(managed_traceback_state: None) -> None:
    cli_mod.apply_traceback_preferences(True)

    assert lib_cli_exit_tools.config.traceback is True
    assert lib_cli_exit_tools.config.traceback_force_color is True


@pytest.mark.os_agnostic
def test_restore_traceback_state_resets_flags_to_previous(managed_traceback_state: None) -> None:
    previous = cli_mod.snapshot_traceback_state()
    cli_mod.apply_traceback_preferences(True)

    cli_mod.restore_traceback_state(previous)

    assert cli_mod.snapshot_traceback_state() == (False, False)


@pytest.mark.os_agnostic
def test_traceback_flag_is_active_during_info_command(
    monkeypatch: pytest.MonkeyPatch,
    managed_traceback_state: None,
) -> None:
    notes: list[tuple[bool, bool]] = []

    def record() -> None:
        notes.append(cli_mod.snapshot_traceback_state())

    monkeypatch.setattr(__init__conf__, "print_info", record)

    exit_code = cli_mod.main(["--traceback", "info"], services_factory=build_production)

    assert exit_code == 0
    assert notes == [(True, True)]
    assert cli_mod.snapshot_traceback_state() == (False, False)


@pytest.mark.os_agnostic
def test_restore_traceback_false_keeps_flags_enabled(
    monkeypatch: pytest.MonkeyPatch,
    managed_traceback_state: None,
) -> None:
    monkeypatch.setattr(__init__conf__, "print_info", lambda: None)

    cli_mod.main(["--traceback", "info"], restore_traceback=False, services_factory=build_production)

    assert cli_mod.snapshot_traceback_state() == (True, True)


@pytest.mark.os_agnostic
def test_main_requires_services_factory() -> None:
    with pytest.raises(ValueError, match="services_factory is required"):
        cli_mod.main(["info"])


@pytest.mark.os_agnostic
def test_main_runs_info_with_production_services(
    managed_traceback_state: None,
    capsys: pytest.CaptureFixture[str],
) -> None:
    result = cli_mod.main(["info"], services_factory=build_production)

    assert result == 0
    assert f"Info for {__init__conf__.name}:" in capsys.readouterr().out


@pytest.mark.os_agnostic
def test_main_without_arguments_shows_help(
    managed_traceback_state: None,
    capsys: pytest.CaptureFixture[str],
) -> None:
    exit_code = cli_mod.main([], services_factory=build_production)

    assert exit_code == 0
    assert "Usage:" in capsys.readouterr().out


@pytest.mark.os_agnostic
def test_main_returns_version_exit_code(
    managed_traceback_state: None,
    capsys: pytest.CaptureFixture[str],
) -> None:
    exit_code = cli_mod.main(["--version"], services_factory=build_production)

    assert exit_code == 0
    assert f"courier version {__init__conf__.version}" in capsys.readouterr().out


@pytest.mark.os_agnostic
def test_traceback_flag_displays_full_exception_traceback(
    monkeypatch: pytest.MonkeyPatch,
    managed_traceback_state: None,
    capsys: pytest.CaptureFixture[str],
    strip_ansi: Callable[[str], str],
) -> None:
    monkeypatch.setattr(__init__conf__, "print_info", _fail)

    exit_code = cli_mod.main(["--traceback", "info"], services_factory=build_production)

    plain_err = strip_ansi(capsys.readouterr().err)
    assert exit_code != 0
    assert "Traceback (most recent call last)" in plain_err
    assert "RuntimeError: I should fail" in plain_err
    assert cli_mod.snapshot_traceback_state() == (False, False)


@pytest.mark.os_agnostic
def test_unexpected_error_without_traceback_is_summarized(
    monkeypatch: pytest.MonkeyPatch,
    managed_traceback_state: None,
    capsys: pytest.CaptureFixture[str],
    strip_ansi: Callable[[str], str],
) -> None:
    monkeypatch.setattr(__init__conf__, "print_info", _fail)

    exit_code = cli_mod.main(["info"], services_factory=build_production)

    plain_err = strip_ansi(capsys.readouterr().err)
    assert exit_code != 0
    assert "I should fail" in plain_err


@pytest.mark.os_agnostic
def test_cli_without_arguments_prints_help(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    result = cli_runner.invoke(cli_mod.cli, [], obj=production_factory)

    assert result.exit_code == 0
    assert "Usage:" in result.output


@pytest.mark.os_agnostic
def test_info_command_displays_project_metadata(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    result: Result = cli_runner.invoke(cli_mod.cli, ["info"], obj=production_factory)

    assert result.exit_code == 0
    assert f"Info for {__init__conf__.name}:" in result.output
    assert __init__conf__.version in result.output


@pytest.mark.os_agnostic
def test_unknown_command_shows_no_such_command_error(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    result: Result = cli_runner.invoke(cli_mod.cli, ["does-not-exist"], obj=production_factory)

    assert result.exit_code != 0
    assert "No such command" in result.output


@pytest.mark.os_agnostic
def test_missing_services_factory_is_reported_as_bug(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_mod.cli, ["info"], obj=None)

    assert isinstance(result.exception, RuntimeError)


@pytest.mark.os_agnostic
def test_malformed_set_override_is_a_usage_error(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_mod.cli, ["--set", "no-equals-sign", "info"], obj=build_testing)

    assert result.exit_code == 2
    assert "expected KEY=VALUE" in result.output


@pytest.mark.os_agnostic
def test_root_stores_profile_and_overrides_in_context(cli_runner: CliRunner) -> None:
    captured: list[CLIContext] = []

    @cli_mod.cli.command("capture-context")
    @click.pass_context
    def _capture(ctx: click.Context) -> None:
        captured.append(get_cli_context(ctx))

    try:
        result = cli_runner.invoke(
            cli_mod.cli,
            ["--profile", "staging", "--set", "sparkpost.timeout=5", "capture-context"],
            obj=build_testing,
        )
    finally:
        cli_mod.cli.commands.pop("capture-context", None)

    assert result.exit_code == 0
    cli_ctx = captured[0]
    assert cli_ctx.profile == "staging"
    assert cli_ctx.set_overrides == ("sparkpost.timeout=5",)
    assert cli_ctx.config["sparkpost"]["timeout"] == 5


@pytest.mark.os_agnostic
def test_get_cli_context_without_root_raises() -> None:
    ctx = click.Context(click.Command("orphan"))

    with pytest.raises(RuntimeError, match="not initialized"):
        get_cli_context(ctx)
