"""
Zenith - A modular status bar with a built-in task list
"""

__version__ = "0.1.0"

from .controller import BarController

__all__ = ["BarController"]
