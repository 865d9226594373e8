"""
Rendering surfaces for Zenith.
"""

import logging
from typing import Dict, Type

from ..utils.errors import SurfaceError
from .base import Node, Surface
from .console import ConsoleSurface
from .memory import MemorySurface, TreeNode

logger = logging.getLogger(__name__)

SURFACES: Dict[str, Type[Surface]] = {
    MemorySurface.name: MemorySurface,
    ConsoleSurface.name: ConsoleSurface,
}


def get_surface(name: str, **kwargs) -> Surface:
    """
    Create the rendering surface called ``name``.

    Raises:
        SurfaceError: If the backend is unknown or cannot be created
    """
    surface_class = SURFACES.get(name)
    if surface_class is None:
        raise SurfaceError(f"Unknown surface '{name}' (available: {', '.join(sorted(SURFACES))})")

    try:
        surface = surface_class(**kwargs)
    except SurfaceError:
        raise
    except Exception as e:
        raise SurfaceError(f"Could not create {name} surface: {e}") from e

    logger.debug(f"Created {surface!r}")
    return surface


__all__ = [
    "Node",
    "Surface",
    "TreeNode",
    "MemorySurface",
    "ConsoleSurface",
    "get_surface",
]
