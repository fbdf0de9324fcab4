"""Planner configuration: named constants and config file loading."""

import json
import warnings
from pathlib import Path
from typing import Dict, Any

import yaml


METERS_PER_INCH = 0.0254
METERS_PER_DEGREE_LAT = 111_320.0
MIN_STEP_DEGREES = 1e-6
COORDINATE_TOLERANCE = 1e-10
MIN_RING_VERTICES = 3
MAX_ITERATIONS = 200
CONVERGENCE_RATIO = 0.1
COLLAPSE_AREA = 1e-10
MIN_STRIPES = 3
MAX_STRIPES = 200
MAX_DECK_WIDTH_INCHES = 240.0

# Walking-speed push mower
DEFAULT_MOWING_SPEED_MPH = 3.0
DEFAULT_TURN_OVERHEAD_SECONDS = 1.0

PATTERNS = ('spiral', 'stripes')
EDGE_CHECK_MODES = ('midpoint', 'segment')


class ConfigError(ValueError):
    """Raised when a config file cannot be read."""


class PlannerConfig:
    """Tunable values for the coverage planner."""

    KNOWN_KEYS = {
        'pattern', 'edge_check',
        'meters_per_degree_lat', 'min_step_degrees', 'coordinate_tolerance',
        'min_ring_vertices', 'max_iterations', 'convergence_ratio', 'collapse_area',
        'min_stripes', 'max_stripes',
    }

    def __init__(
        self,
        pattern: str = 'spiral',
        edge_check: str = 'midpoint',
        meters_per_degree_lat: float = METERS_PER_DEGREE_LAT,
        min_step_degrees: float = MIN_STEP_DEGREES,
        coordinate_tolerance: float = COORDINATE_TOLERANCE,
        min_ring_vertices: int = MIN_RING_VERTICES,
        max_iterations: int = MAX_ITERATIONS,
        convergence_ratio: float = CONVERGENCE_RATIO,
        collapse_area: float = COLLAPSE_AREA,
        min_stripes: int = MIN_STRIPES,
        max_stripes: int = MAX_STRIPES,
    ):
        """Initialize the planner configuration.

        Args:
            pattern: Coverage pattern, 'spiral' (default) or 'stripes'
            edge_check: How traced edges are tested against obstacles, 'midpoint' (default) or 'segment'
            meters_per_degree_lat: Real-world meters per degree of latitude
            min_step_degrees: Floor for the per-iteration angular step
            coordinate_tolerance: Tolerance for coordinate equality, in degrees
            min_ring_vertices: Rings with fewer vertices end the spiral
            max_iterations: Safety ceiling on spiral iterations per area
            convergence_ratio: A ring shrinking below this fraction of its predecessor's area ends the spiral
            collapse_area: Rings below this area (square degrees) are considered collapsed
            min_stripes: Minimum stripe count for the stripes pattern
            max_stripes: Maximum stripe count for the stripes pattern
        """
        if pattern not in PATTERNS:
            raise ConfigError(f"Invalid pattern '{pattern}'. Must be one of: {', '.join(PATTERNS)}")
        if edge_check not in EDGE_CHECK_MODES:
            raise ConfigError(f"Invalid edge check '{edge_check}'. Must be one of: {', '.join(EDGE_CHECK_MODES)}")

        self.pattern = pattern
        self.edge_check = edge_check
        self.meters_per_degree_lat = meters_per_degree_lat
        self.min_step_degrees = min_step_degrees
        self.coordinate_tolerance = coordinate_tolerance
        self.min_ring_vertices = min_ring_vertices
        self.max_iterations = max_iterations
        self.convergence_ratio = convergence_ratio
        self.collapse_area = collapse_area
        self.min_stripes = min_stripes
        self.max_stripes = max_stripes

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'PlannerConfig':
        """Build a config from a dict, ignoring (and warning about) unknown keys."""
        unknown_keys = set(values) - cls.KNOWN_KEYS
        if unknown_keys:
            warnings.warn(f"Unknown planner configuration keys ignored: {', '.join(sorted(unknown_keys))}")
        return cls(**{k: v for k, v in values.items() if k in cls.KNOWN_KEYS})

    def to_dict(self) -> Dict[str, Any]:
        return {key: getattr(self, key) for key in sorted(self.KNOWN_KEYS)}


def load_config(config_path: Path) -> Dict[str, Any]:
    """Load configuration from JSON or YAML file.

    Args:
        config_path: Path to config file

    Returns:
        Dictionary of configuration values
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Config file '{config_path}' not found")

    suffix = config_path.suffix.lower()

    with open(config_path, 'r') as f:
        if suffix == '.json':
            try:
                config = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f"Could not parse {config_path.name}: {e}") from e
        elif suffix in ['.yaml', '.yml']:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Could not parse {config_path.name}: {e}") from e
        else:
            raise ConfigError(f"Unsupported config file format '{suffix}'. Use .json or .yaml")

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"Config file {config_path.name} must contain a mapping of settings")

    return config
