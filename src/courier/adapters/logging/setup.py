"""lib_log_rich initialization shared by every entry point.

Contents:
    * :class:`LoggingConfigModel` - typed view of the ``[lib_log_rich]`` section.
    * :func:`init_logging` - idempotent runtime initialization.

System Role:
    Adapter layer. Domain and adapter modules log through the standard
    ``logging`` module; :func:`init_logging` bridges those loggers into the
    lib_log_rich runtime so records gain console styling and context fields.
"""

from __future__ import annotations

from typing import Any, cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from courier import __init__conf__


class LoggingConfigModel(BaseModel):
    """``[lib_log_rich]`` settings; unknown keys pass through to RuntimeConfig.

    Example:
        >>> LoggingConfigModel().environment
        'prod'
        >>> LoggingConfigModel(console_level="DEBUG").model_dump(exclude_none=True)
        {'environment': 'prod', 'console_level': 'DEBUG'}
    """

    model_config = ConfigDict(extra="allow")

    service: str | None = None
    environment: str = "prod"


def _build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    section: Any = config.get("lib_log_rich", default={})
    parsed = LoggingConfigModel.model_validate(cast("dict[str, object]", section) if section else {})
    passthrough = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)
    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **passthrough,
    )


def init_logging(config: Config) -> None:
    """Start the lib_log_rich runtime unless it is already running.

    Loads ``.env`` first so ``LOG_*`` variables defined there take effect,
    then attaches the standard ``logging`` bridge.

    Example:
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "LoggingConfigModel",
    "init_logging",
]
