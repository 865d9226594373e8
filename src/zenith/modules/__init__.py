"""
Bar modules: auto-updating and interactive pieces of the bar.

Modules display:
- Time and date (clock, calendar)
- System metrics (CPU, memory, temperature, GPU)
- The persistent task list

This package provides the base module infrastructure; concrete modules are
found by ``ModuleRegistry.auto_discover``.
"""

from .base import BaseModule

__all__ = ["BaseModule"]
