"""
System stats module: CPU, memory, temperature and GPU load.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import psutil

from ..sensors import read_gpu_usage, read_temperature
from ..sensors.gpu import DRM_ROOT
from ..sensors.thermal import THERMAL_ROOT
from ..surface.base import Node, Surface
from .base import BaseModule

logger = logging.getLogger(__name__)


def clamp_percent(value: float) -> float:
    return max(0.0, min(100.0, float(value)))


@dataclass(frozen=True)
class SystemReading:
    """
    One sample of system load. Optional figures are None when unavailable.
    """

    cpu: Optional[float] = None
    memory: Optional[float] = None
    temperature: Optional[float] = None
    gpu: Optional[float] = None


def load_tier(percent: float) -> str:
    if percent >= 90:
        return "critical"
    if percent >= 70:
        return "high"
    return "normal"


class SystemModule(BaseModule):
    """
    Display CPU and memory usage, plus temperature and GPU load when the
    hardware exposes them.

    Configuration:
        thermal_root: Thermal zone directory (default: /sys/class/thermal)
        drm_root: DRM device directory for AMD GPUs (default: /sys/class/drm)

    A figure that is missing from a sample leaves its label unchanged; labels
    start at "--" until the first good reading.
    """

    module_type = "system"
    update_interval = 2.0

    def build(self, surface: Surface) -> Node:
        container = surface.create_node("module")

        self.cpu_label = surface.create_node("label")
        self.memory_label = surface.create_node("label")
        self.temperature_label = surface.create_node("label")
        self.gpu_label = surface.create_node("label")

        self.cpu_label.set_text("CPU: --%")
        self.memory_label.set_text("MEM: --%")
        # Hidden until the hardware reports something
        self.temperature_label.set_visible(False)
        self.gpu_label.set_visible(False)

        for label in (self.cpu_label, self.memory_label, self.temperature_label, self.gpu_label):
            container.append_child(label)

        # Prime the CPU counter; the first non-blocking call always returns 0.0
        psutil.cpu_percent(interval=None)
        return container

    def sample(self) -> SystemReading:
        cpu = memory = None
        try:
            # Non-blocking: percentage since the previous call
            cpu = clamp_percent(psutil.cpu_percent(interval=None))
        except Exception as e:
            logger.error(f"Failed to read CPU usage: {e}")
        try:
            memory = clamp_percent(psutil.virtual_memory().percent)
        except Exception as e:
            logger.error(f"Failed to read memory usage: {e}")

        temperature = read_temperature(self.config.get("thermal_root", THERMAL_ROOT))

        gpu = read_gpu_usage(self.config.get("drm_root", DRM_ROOT))
        if gpu is not None:
            gpu = clamp_percent(gpu)

        return SystemReading(cpu=cpu, memory=memory, temperature=temperature, gpu=gpu)

    def render(self, data: Optional[SystemReading]) -> None:
        if data is None:
            return

        if data.cpu is not None:
            self.cpu_label.set_text(f"CPU: {data.cpu:.0f}%")
            self.cpu_label.set_state(load_tier(data.cpu))
        if data.memory is not None:
            self.memory_label.set_text(f"MEM: {data.memory:.0f}%")
            self.memory_label.set_state(load_tier(data.memory))
        if data.temperature is not None:
            self.temperature_label.set_text(f"TEMP: {data.temperature:.0f}°C")
            self.temperature_label.set_visible(True)
        if data.gpu is not None:
            self.gpu_label.set_text(f"GPU: {data.gpu:.0f}%")
            self.gpu_label.set_state(load_tier(data.gpu))
            self.gpu_label.set_visible(True)
