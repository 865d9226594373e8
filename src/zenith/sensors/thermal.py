"""
CPU temperature from the kernel thermal zones.
"""

import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

THERMAL_ROOT = Path("/sys/class/thermal")

# Plausible range in degrees Celsius, both bounds exclusive
MIN_PLAUSIBLE = 0.0
MAX_PLAUSIBLE = 150.0


def read_temperature(root: Union[str, Path] = THERMAL_ROOT) -> Optional[float]:
    """
    Highest plausible temperature across all thermal zones.

    Each ``thermal_zone*/temp`` file holds millidegrees. Readings at or below
    0 °C or at or above 150 °C are discarded as sensor noise.

    Returns:
        Degrees Celsius, or None if no zone gave a plausible reading
    """
    readings = []
    for temp_file in sorted(Path(root).glob("thermal_zone*/temp")):
        try:
            millidegrees = int(temp_file.read_text().strip())
        except (OSError, ValueError) as e:
            logger.debug(f"Skipping unreadable thermal zone {temp_file}: {e}")
            continue

        celsius = millidegrees / 1000.0
        if MIN_PLAUSIBLE < celsius < MAX_PLAUSIBLE:
            readings.append(celsius)

    return max(readings) if readings else None
