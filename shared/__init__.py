"""Shared library for the demo services: probes, metrics, lifecycle, config and logging."""

from shared.core.runner import run

__all__ = ["run"]
