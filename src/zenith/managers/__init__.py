"""
Managers for the bar's moving parts.

- ModuleManager: module lifecycle, timers and lookup
- ModuleRegistry: discovery of module types
"""

from .module import ModuleManager, ModuleRegistry

__all__ = [
    "ModuleManager",
    "ModuleRegistry",
]
