"""
Reporting Sinks — Destinations for per-violation and failure-digest messages.

The core only calls `add(message_type, text)`. Delivery guarantees belong to
the sink: the in-memory and logging sinks are synchronous, the JSON-lines sink
appends to a local file and lets I/O errors surface to the caller.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Protocol

from compliance_gate.config import Settings, settings
from compliance_gate.models.report_models import MessageType, ReportMessage

logger = logging.getLogger("compliance_gate.report")


class ReportingSink(Protocol):
    def add(self, message_type: MessageType, text: str) -> None: ...


class InMemoryReportingSink:
    """Collects messages in arrival order."""

    def __init__(self) -> None:
        self.messages: list[ReportMessage] = []

    def add(self, message_type: MessageType, text: str) -> None:
        self.messages.append(ReportMessage(message_type=message_type, text=text))

    def of_type(self, message_type: MessageType) -> list[str]:
        return [m.text for m in self.messages if m.message_type == message_type]


class LoggingReportingSink:
    """Forwards messages to a logger; failure digests go out at WARNING."""

    def __init__(self, target: logging.Logger | None = None) -> None:
        self.target = target or logger

    def add(self, message_type: MessageType, text: str) -> None:
        level = (
            logging.WARNING
            if message_type == MessageType.PROCESSING_FAILURE
            else logging.INFO
        )
        self.target.log(level, f"[{message_type.value}] {text}")


class JsonlReportingSink:
    """Appends one timestamped JSON record per message to a JSON-lines file."""

    def __init__(self, log_path: str | None = None) -> None:
        self.log_path = Path(log_path or settings.report_log_path)

    def add(self, message_type: MessageType, text: str) -> None:
        record = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            **ReportMessage(message_type=message_type, text=text).model_dump(mode="json"),
        }
        with open(self.log_path, "a") as f:
            f.write(json.dumps(record) + "\n")


class FanoutReportingSink:
    """Hands each message to several sinks; the first refusal is re-raised after all were tried."""

    def __init__(self, *sinks: ReportingSink) -> None:
        self.sinks = sinks

    def add(self, message_type: MessageType, text: str) -> None:
        error: Exception | None = None
        for sink in self.sinks:
            try:
                sink.add(message_type, text)
            except Exception as e:
                error = error or e
        if error is not None:
            raise error


def build_reporting_sink(config: Settings | None = None) -> ReportingSink:
    """Build the sink selected by `report_sink`."""
    config = config or settings
    if config.report_sink == "memory":
        return InMemoryReportingSink()
    if config.report_sink == "jsonl":
        return JsonlReportingSink(config.report_log_path)
    return LoggingReportingSink()
