"""memorable_ids.telemetry package."""

from .base import FanoutTelemetrySink, JsonLinesTelemetrySink, NullTelemetrySink, TelemetrySink
from .console import ConsoleTelemetrySink
from .recorder import StructuredTelemetrySink, TelemetryEvent

__all__ = [
    "ConsoleTelemetrySink",
    "FanoutTelemetrySink",
    "JsonLinesTelemetrySink",
    "NullTelemetrySink",
    "StructuredTelemetrySink",
    "TelemetryEvent",
    "TelemetrySink",
]
