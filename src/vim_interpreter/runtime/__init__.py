"""Runtime services (telemetry) shared by the interpreter and adapters."""

from . import telemetry

__all__ = ["telemetry"]
