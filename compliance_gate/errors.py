"""
Compliance Gate exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from compliance_gate.models.report_models import MessageType, Outcome


class ConfigurationError(ValueError):
    """The failure threshold is not one of the recognised severity names."""


@dataclass
class DeliveryFailure:
    """A message the reporting sink refused."""

    message_type: MessageType
    text: str
    error: Exception


class ReportDeliveryError(RuntimeError):
    """One or more messages could not be handed to the reporting sink.

    Raised after every message of the pass has been attempted. The computed
    outcome is attached so callers can still act on the gate decision.
    """

    def __init__(self, failures: list[DeliveryFailure], outcome: Outcome) -> None:
        self.failures = failures
        self.outcome = outcome
        super().__init__(
            f"{len(failures)} report message(s) could not be delivered: "
            f"{type(failures[0].error).__name__}: {failures[0].error}"
        )
