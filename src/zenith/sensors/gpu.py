"""
GPU utilization probes.

Two vendor-specific sources are tried in order; the first one that answers
wins. NVIDIA is queried through ``nvidia-smi``, AMD through the amdgpu sysfs
``gpu_busy_percent`` attribute.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

DRM_ROOT = Path("/sys/class/drm")

# Bound on the helper process so a hung driver only delays one tick
NVIDIA_SMI_TIMEOUT = 1.0

NVIDIA_SMI_COMMAND = [
    "nvidia-smi",
    "--query-gpu=utilization.gpu",
    "--format=csv,noheader,nounits",
]


def query_nvidia(timeout: float = NVIDIA_SMI_TIMEOUT) -> Optional[float]:
    """Utilization of the first NVIDIA GPU in percent, or None."""
    try:
        result = subprocess.run(
            NVIDIA_SMI_COMMAND,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        return None
    except (subprocess.TimeoutExpired, OSError) as e:
        logger.debug(f"nvidia-smi failed: {e}")
        return None

    lines = (result.stdout or "").strip().splitlines()
    if result.returncode != 0 or not lines:
        return None

    try:
        return float(lines[0].strip())
    except ValueError:
        logger.debug(f"Unexpected nvidia-smi output: {result.stdout!r}")
        return None


def query_amd(root: Union[str, Path] = DRM_ROOT) -> Optional[float]:
    """Utilization of the first amdgpu card in percent, or None."""
    for busy_file in sorted(Path(root).glob("card*/device/gpu_busy_percent")):
        try:
            return float(busy_file.read_text().strip())
        except (OSError, ValueError) as e:
            logger.debug(f"Skipping {busy_file}: {e}")
    return None


def read_gpu_usage(drm_root: Union[str, Path] = DRM_ROOT) -> Optional[float]:
    """GPU utilization from the first source that answers, or None."""
    usage = query_nvidia()
    if usage is None:
        usage = query_amd(drm_root)
    return usage
