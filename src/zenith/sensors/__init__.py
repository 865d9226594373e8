"""
Hardware probes used by the system stats module.

Every probe returns None when its data is unavailable; that is a normal
result, not an error.
"""

from .gpu import query_amd, query_nvidia, read_gpu_usage
from .thermal import read_temperature

__all__ = [
    "read_temperature",
    "read_gpu_usage",
    "query_nvidia",
    "query_amd",
]
