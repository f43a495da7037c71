"""
Configuration and tolerances.
"""

from asian_pricing.config.settings import (
    SETTINGS,
    ControlVariateConfig,
    DegeneratePolicy,
    Settings,
    SimulationConfig,
)

__all__ = [
    "SETTINGS",
    "ControlVariateConfig",
    "DegeneratePolicy",
    "Settings",
    "SimulationConfig",
]
