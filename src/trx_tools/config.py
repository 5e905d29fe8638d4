"""Configuration parsing from ``.trx-tools.yml``."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

if TYPE_CHECKING:
    from datetime import tzinfo

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".trx-tools.yml"

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _resolve_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var = match.group(1)
        resolved = os.environ.get(var)
        if resolved is None:
            logger.warning("Environment variable %s is not set (referenced in config)", var)
            return ""
        return resolved

    return _ENV_VAR_RE.sub(_replace, value)


def _resolve_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively resolve environment variables in a dictionary."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str):
            result[key] = _resolve_env_vars(value)
        elif isinstance(value, dict):
            result[key] = _resolve_dict(value)
        elif isinstance(value, list):
            result[key] = [
                _resolve_env_vars(item) if isinstance(item, str) else item for item in value
            ]
        else:
            result[key] = value
    return result


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    value = raw.get(name, {})
    return value if isinstance(value, dict) else {}


@dataclass
class ReportConfig:
    """HTML report configuration."""

    output_dir: str = "."
    """Directory where HTML reports are written."""

    title: str = "Test Results"
    """Title shown at the top of every report."""


@dataclass
class ParsingConfig:
    """TRX parsing configuration."""

    naive_timezone: str = ""
    """IANA zone for timestamps without a UTC offset; empty rejects them."""

    def resolve_timezone(self) -> tzinfo | None:
        """Return the configured zone, or ``None`` when naive timestamps are rejected."""
        if not self.naive_timezone:
            return None
        return ZoneInfo(self.naive_timezone)


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"
    """Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""


@dataclass
class TrxToolsConfig:
    """Top-level configuration."""

    report: ReportConfig = field(default_factory=ReportConfig)
    parsing: ParsingConfig = field(default_factory=ParsingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    raw: dict[str, Any] = field(default_factory=dict)
    """The resolved YAML document, for display."""


def load_config(root: str | Path) -> TrxToolsConfig:
    """Load ``.trx-tools.yml`` from *root*.

    Falls back to defaults and environment variables when the file is
    missing or incomplete.
    """
    root_path = Path(root).resolve()
    config_file = root_path / CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_file.is_file():
        parsed = yaml.safe_load(config_file.read_text(encoding="utf-8"))
        if isinstance(parsed, dict):
            raw = _resolve_dict(parsed)
        else:
            logger.warning("Ignoring %s: top level is not a mapping", config_file)

    report_raw = _section(raw, "report")
    report = ReportConfig(
        output_dir=str(report_raw.get("output_dir", os.environ.get("TRX_TOOLS_OUTPUT_DIR", "."))),
        title=str(report_raw.get("title", "Test Results")),
    )

    parsing_raw = _section(raw, "parsing")
    parsing = ParsingConfig(
        naive_timezone=str(
            parsing_raw.get("naive_timezone", os.environ.get("TRX_TOOLS_NAIVE_TIMEZONE", ""))
        ),
    )

    logging_raw = _section(raw, "logging")
    logging_config = LoggingConfig(
        level=str(
            logging_raw.get("level", os.environ.get("TRX_TOOLS_LOG_LEVEL", "WARNING"))
        ).upper(),
    )

    return TrxToolsConfig(report=report, parsing=parsing, logging=logging_config, raw=raw)


def validate_config(config: TrxToolsConfig) -> list[str]:
    """Return a list of human-readable configuration errors (empty when valid)."""
    errors: list[str] = []

    if not config.report.output_dir.strip():
        errors.append("report.output_dir must not be empty")

    if config.parsing.naive_timezone:
        try:
            config.parsing.resolve_timezone()
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(
                f"parsing.naive_timezone {config.parsing.naive_timezone!r} "
                "is not a known IANA time zone"
            )

    if config.logging.level not in _VALID_LOG_LEVELS:
        errors.append(
            f"logging.level must be one of {', '.join(sorted(_VALID_LOG_LEVELS))}, "
            f"got {config.logging.level!r}"
        )

    return errors
