"""Logging for cratekit.

Everything goes to stderr through one stdlib handler rendered by
structlog, so stdout stays clean for results. ``--verbose`` opens the
``cratekit`` logger to DEBUG; that is where each command line
(``command.run``) and its exit status and captured output
(``command.result``) are traced. ``--log-json`` switches to one JSON
object per line.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

LOGGER_NAME = "cratekit"


def drop_empty_output(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Leave empty ``stdout``/``stderr`` fields out of command traces."""
    for key in ("stdout", "stderr"):
        if event_dict.get(key) == "":
            del event_dict[key]
    return event_dict


def _pre_chain(log_json: bool) -> list[structlog.types.Processor]:
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso" if log_json else "%H:%M:%S"),
        drop_empty_output,
    ]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route cratekit logging to stderr. Safe to call more than once."""
    pre_chain = _pre_chain(log_json)
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)
    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)
