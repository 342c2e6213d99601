"""Runtime services shared by the surround engine."""

from . import telemetry

__all__ = ["telemetry"]
