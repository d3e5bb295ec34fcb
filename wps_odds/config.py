"""
Configuration management for the Win/Place/Show estimator.

Simulation presets and versioned JSON config loading.

Config file format:
{
    "version": "1.0",
    "simulation": {
        "samples": 10000,
        "salt": 42,
        "max_ticks": 500
    }
}
"""

import json
from typing import Dict, Any

from .types import SimulationConfig, MAX_TICKS


CONFIG_VERSION = "1.0"


# =============================================================================
# Simulation Presets
# =============================================================================

SIMULATION_PRESETS: Dict[str, SimulationConfig] = {
    # Smoke runs; roughly +/-150 bps noise on a 1/6 win probability
    'quick': SimulationConfig(samples=1000),

    'standard': SimulationConfig(samples=10000),

    # Around +/-25 bps at 95% on a 1/6 win probability
    'precise': SimulationConfig(samples=100000),
}

DEFAULT_PRESET = 'standard'


# =============================================================================
# JSON Loading Utilities
# =============================================================================

def _validate_version(data: Dict[str, Any]) -> None:
    """Validate config version."""
    version = data.get('version', CONFIG_VERSION)
    if version != CONFIG_VERSION:
        raise ValueError(
            f"Unsupported config version '{version}'. "
            f"Expected '{CONFIG_VERSION}'."
        )


def config_from_dict(data: Dict[str, Any]) -> SimulationConfig:
    """Build a SimulationConfig from a parsed config document."""
    _validate_version(data)
    sim = data.get('simulation', {})

    salt = sim.get('salt')
    return SimulationConfig(
        samples=int(sim.get('samples', 10000)),
        salt=int(salt) if salt is not None else None,
        max_ticks=int(sim.get('max_ticks', MAX_TICKS)),
    )


def load_config_from_json(path: str) -> SimulationConfig:
    """
    Load simulation config from JSON file.

    Raises:
        ValueError: If config version is unsupported or values are invalid
    """
    with open(path, 'r') as f:
        data = json.load(f)

    return config_from_dict(data)


def save_config_to_json(config: SimulationConfig, path: str) -> None:
    """Save simulation config to JSON file."""
    data = {
        'version': CONFIG_VERSION,
        'simulation': {
            'samples': config.samples,
            'salt': config.salt,
            'max_ticks': config.max_ticks,
        }
    }

    with open(path, 'w') as f:
        json.dump(data, f, indent=2)
