"""Shared pytest fixtures for courier tests.

Centralizes test infrastructure:
- All shared fixtures live here
- Tests import fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import contextlib
import os
import re
import tempfile
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config
from lib_layered_config.domain.config import SourceInfo

from courier.domain.email import Address, Email, SimpleContent, TemplatedContent

if TYPE_CHECKING:
    from courier.adapters.memory.transmission import TransmissionSpy
    from courier.composition import AppServices

_COVERAGE_BASENAME = ".coverage.courier"


def _purge_stale_coverage_files(cov_path: Path) -> None:
    """Delete leftover SQLite database and journal files from crashed runs."""
    for suffix in ("", "-journal", "-wal", "-shm"):
        with contextlib.suppress(FileNotFoundError):
            Path(str(cov_path) + suffix).unlink()


def pytest_configure(config: pytest.Config) -> None:
    """Keep the coverage database on a local temp directory.

    Runs before pytest-cov creates its ``Coverage()`` object, so
    ``COVERAGE_FILE`` applies however pytest is invoked.
    """
    if "COVERAGE_FILE" not in os.environ:
        cov_path = Path(tempfile.gettempdir()) / _COVERAGE_BASENAME
        _purge_stale_coverage_files(cov_path)
        os.environ["COVERAGE_FILE"] = str(cov_path)


def _load_dotenv() -> None:
    """Load .env file when it exists for integration test configuration."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))


def _snapshot_cli_config() -> dict[str, object]:
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` for the transmission id; log records and error
    messages go to stderr.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for tests."""
    from courier.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return ANSI_ESCAPE_PATTERN.sub("", value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before each test.

    Only clears before, not after, so tests that monkeypatch ``get_config``
    do not break the teardown.
    """
    from courier.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts without filesystem I/O."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def source_info_factory() -> Callable[[str, str, str | None], SourceInfo]:
    """Create SourceInfo dicts for provenance-tracking tests.

    Example:
        def test_provenance(source_info_factory: Callable[..., SourceInfo]) -> None:
            info = source_info_factory("sparkpost.api_key", "env", None)
            assert info["layer"] == "env"
    """

    def _factory(key: str, layer: str, path: str | None = None) -> SourceInfo:
        return {"layer": layer, "path": path, "key": key}

    return _factory


@pytest.fixture
def sender() -> Address:
    return Address("news@mail.example.com", "Example News")


@pytest.fixture
def simple_email(sender: Address) -> Email:
    """A plain-text email with one To, one Cc and one Bcc recipient."""
    return Email(
        from_address=sender,
        subject="Monthly update",
        content=SimpleContent(text="Hello", html="<p>Hello</p>"),
        to=[Address("jane@example.com", "Jane")],
        cc=[Address("cc@example.com")],
        bcc=[Address("audit@example.com")],
    )


@pytest.fixture
def templated_email(sender: Address) -> Email:
    """A stored-template email carrying caller substitution data."""
    return Email(
        from_address=sender,
        subject="Welcome",
        content=TemplatedContent(template_id="welcome-v2", substitution_data={"first_name": "Jane"}),
        to=[Address("jane@example.com", "Jane")],
    )


@pytest.fixture
def transmission_spy() -> TransmissionSpy:
    from courier.adapters.memory import TransmissionSpy

    return TransmissionSpy()


@pytest.fixture
def config_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Create a services factory whose ``get_config`` returns the given data.

    Display and logging stay production-wired so ``config`` output is real.

    Example:
        def test_config_display(cli_runner, config_cli_context) -> None:
            factory = config_cli_context({"sparkpost": {"timeout": 5}})
            result = cli_runner.invoke(cli, ["config"], obj=factory)
            assert "timeout" in result.output
    """
    from courier.composition import AppServices, build_production

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        config = Config(config_data, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            init_logging=prod.init_logging,
            load_sparkpost_config_from_dict=prod.load_sparkpost_config_from_dict,
            build_courier=prod.build_courier,
        )
        return lambda: test_services

    return _create


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Return a factory whose ``get_config`` records the profile it receives."""
    from courier.composition import AppServices, build_production

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        prod = build_production()
        test_services = AppServices(
            get_config=_capturing_get_config,
            display_config=prod.display_config,
            init_logging=prod.init_logging,
            load_sparkpost_config_from_dict=prod.load_sparkpost_config_from_dict,
            build_courier=prod.build_courier,
        )
        return lambda: test_services

    return _inject


@dataclass
class SendCliContext:
    """Container for send-command test setup.

    Attributes:
        factory: Callable that returns wired AppServices for CLI invocation.
        spy: TransmissionSpy capturing what the real courier mapping produced.
    """

    factory: Callable[[], Any]
    spy: TransmissionSpy


@pytest.fixture
def send_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], SendCliContext]:
    """Create a send-command test context from a ``[sparkpost]`` section.

    The real SparkPostCourier runs; only the HTTP transport is replaced by a
    spy, so assertions can inspect the exact transmission.

    Example:
        def test_send(cli_runner, send_cli_context) -> None:
            ctx = send_cli_context({"api_key": "k", "from_address": "a@example.com"})
            result = cli_runner.invoke(cli, ["send-email", "--to", "b@example.com", "--subject", "Hi"], obj=ctx.factory)
            assert ctx.spy.last.recipients[0].address.email == "b@example.com"
    """
    from courier.adapters.memory import TransmissionSpy, load_sparkpost_config_from_dict_in_memory
    from courier.composition import AppServices, build_production

    def _create(sparkpost_data: dict[str, Any]) -> SendCliContext:
        spy = TransmissionSpy()
        config = Config({"sparkpost": sparkpost_data}, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            init_logging=prod.init_logging,
            load_sparkpost_config_from_dict=load_sparkpost_config_from_dict_in_memory,
            build_courier=spy.build_courier,
        )
        return SendCliContext(factory=lambda: test_services, spy=spy)

    return _create
