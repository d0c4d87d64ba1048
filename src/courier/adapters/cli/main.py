"""Process entry point for the ``courier`` command.

Contents:
    * :func:`main` - run the CLI and translate the outcome into an exit code.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import click
import lib_cli_exit_tools
import lib_log_rich.runtime

from courier import __init__conf__

from .constants import TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import (
    apply_traceback_preferences,
    restore_traceback_state,
    snapshot_traceback_state,
)

if TYPE_CHECKING:
    from courier.composition import AppServices


def _invoke(argv: Sequence[str] | None, services_factory: Callable[[], AppServices]) -> int:
    from .root import cli

    try:
        cli.main(
            args=list(argv) if argv is not None else sys.argv[1:],
            prog_name=__init__conf__.shell_command,
            obj=services_factory,
            standalone_mode=False,
        )
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except BaseException as exc:
        verbose = bool(getattr(lib_cli_exit_tools.config, "traceback", False))
        apply_traceback_preferences(verbose)
        lib_cli_exit_tools.print_exception_message(
            trace_back=verbose,
            length_limit=TRACEBACK_VERBOSE_LIMIT if verbose else TRACEBACK_SUMMARY_LIMIT,
        )
        return lib_cli_exit_tools.get_system_exit_code(exc)
    return 0


def main(
    argv: Sequence[str] | None = None,
    *,
    restore_traceback: bool = True,
    services_factory: Callable[[], AppServices] | None = None,
) -> int:
    """Run ``courier`` with ``argv`` and return the exit code.

    ``SystemExit`` raised by commands (see :class:`~.exit_codes.ExitCode`)
    becomes the return value; other exceptions are printed through
    lib_cli_exit_tools. The lib_log_rich runtime is shut down afterwards
    when running on the main thread.

    Args:
        argv: Arguments without the program name; ``None`` reads ``sys.argv``.
        restore_traceback: Reset lib_cli_exit_tools traceback flags afterwards.
        services_factory: Builds the :class:`~courier.composition.AppServices`
            for this run, typically ``build_production``.

    Raises:
        ValueError: If ``services_factory`` is missing.

    Example:
        >>> from courier.composition import build_testing
        >>> main(["--version"], services_factory=build_testing)  # doctest: +SKIP
        0
    """
    if services_factory is None:
        raise ValueError("services_factory is required. Pass build_production from composition layer.")

    previous_state = snapshot_traceback_state()
    try:
        return _invoke(argv, services_factory)
    finally:
        if restore_traceback:
            restore_traceback_state(previous_state)
        if threading.current_thread() is threading.main_thread() and lib_log_rich.runtime.is_initialised():
            lib_log_rich.runtime.shutdown()


__all__ = ["main"]
