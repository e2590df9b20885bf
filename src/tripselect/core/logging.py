"""
Logging configuration.

The packaged YAML config (`src/tripselect/config/logging.yaml`) defines handlers and
formatters; the level comes from settings (`app.log_level` / `TRIPSELECT_LOG_LEVEL`)
unless the caller passes one explicitly (e.g. the CLI `--log-level` flag).
"""

from __future__ import annotations

import copy
import logging.config

from tripselect.config.settings import get_logging_config, get_settings


def configure_logging(level: str | None = None) -> None:
    """Apply the packaged logging config with the effective level."""
    # Deep copy: the YAML payload is cached and must stay pristine between calls.
    config = copy.deepcopy(get_logging_config())
    effective = (level or get_settings().app.log_level).upper()

    config.setdefault("root", {})["level"] = effective
    for handler in config.get("handlers", {}).values():
        if isinstance(handler, dict):
            handler["level"] = effective
    config.setdefault("loggers", {}).setdefault("tripselect", {"propagate": True})["level"] = effective

    logging.config.dictConfig(config)
