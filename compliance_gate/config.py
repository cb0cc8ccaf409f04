"""
Compliance Gate Configuration — pydantic-settings based.

All settings are read from environment variables or .env file.
The failure threshold is validated when a checker is built from it, so a bad
value fails fast before any evaluation runs.
"""

from __future__ import annotations

from typing import Literal, Mapping

from pydantic import Field
from pydantic_settings import BaseSettings

from compliance_gate.models.evaluation_models import Severity

FAIL_ON_KEY = "failOn"


class Settings(BaseSettings):
    """Application-wide settings sourced from environment variables."""

    # ── Gate ──
    fail_on: str = Field(
        default=Severity.FAIL.value,
        description="Minimum severity that fails the run: INFO, WARN or FAIL",
    )
    ruleset_description: str = Field(
        default="default", description="Name of the rule set shown in failure digests"
    )

    # ── Reporting ──
    report_sink: Literal["memory", "logging", "jsonl"] = Field(
        default="logging", description="Where per-violation messages are sent"
    )
    report_log_path: str = Field(
        default="compliance_report.jsonl",
        description="Path to JSON-lines report file (jsonl sink only)",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    # ── Server ──
    port: int = Field(default=5001, description="Server port")
    host: str = Field(default="0.0.0.0", description="Server bind host")
    cors_origins: list[str] = Field(
        default=["*"], description="Allowed CORS origins"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    @property
    def fail_on_severity(self) -> Severity:
        return Severity.from_value(self.fail_on)


def severity_from_config(
    key: str,
    config_map: Mapping[str, str],
    default: Severity,
) -> Severity:
    """Look up a severity in a plain config mapping, falling back to default."""
    value = config_map.get(key)
    if value is None:
        return default
    return Severity.from_value(value)


# Singleton instance — imported by other modules
settings = Settings()
