"""
Configuration Loading System

Loads YAML configuration files and converts them to the run
configuration consumed by the evolution loop.
"""

import yaml
from typing import Any, Dict, List, Optional

from .data_models import RunConfig
from .geometry import GridBounds
from .nests import NEST_CATALOG, default_nest_count


class ConfigurationError(Exception):
    """Raised when configuration is invalid"""
    pass


DEFAULT_EVOLUTION = {
    "population_size": 50,
    "max_generations": 100,
    "crossover_rate": 0.8,
    "mutation_rate": 0.02,
    "bombs_per_candidate": 3,
    "blast_radius": 10.0,
}

DEFAULT_PACING = {
    "delay_seconds": 0.05,
}

DEFAULT_OUTPUT = {
    "root": "bombard_output",
    "overwrite": False,
    "save_plots": True,
}


def load_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    """Load configuration from YAML file"""
    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError("Configuration root must be a mapping")
    return config


def normalize_rate(value: Any) -> float:
    """
    Convert a rate to a probability.

    Values above 1 are read as percentages, so 80 becomes 0.8.
    """
    rate = float(value)
    if rate > 1.0:
        rate /= 100.0
    return rate


def get_evolution_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Evolution section merged over the defaults"""
    evolution = dict(DEFAULT_EVOLUTION)
    evolution.update(config.get("evolution") or {})
    return evolution


def get_pacing_config(config: Dict[str, Any]) -> Dict[str, Any]:
    pacing = dict(DEFAULT_PACING)
    pacing.update(config.get("pacing") or {})
    return pacing


def get_output_config(config: Dict[str, Any]) -> Dict[str, Any]:
    output = dict(DEFAULT_OUTPUT)
    output.update(config.get("output") or {})
    return output


def _as_number(value: Any) -> Optional[float]:
    """Numeric value of a YAML scalar, or None when it is not a number"""
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _catalog_size(nest_config: Dict[str, Any]) -> int:
    sites = nest_config.get("sites")
    return len(sites) if sites else len(NEST_CATALOG)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of issues

    Returns:
        List of validation error messages (empty if valid)
    """
    issues = []

    def number(value: Any, name: str) -> Optional[float]:
        converted = _as_number(value)
        if converted is None:
            issues.append(f"{name} must be a number, got: {value!r}")
        return converted

    grid_config = config.get("grid") or {}
    width = number(grid_config.get("width", 100), "grid.width")
    height = number(grid_config.get("height", 100), "grid.height")
    if width is not None and width <= 0:
        issues.append("Grid width must be positive")
    if height is not None and height <= 0:
        issues.append("Grid height must be positive")

    evolution = get_evolution_config(config)

    population_size = number(evolution["population_size"], "population_size")
    if population_size is not None and population_size < 2:
        issues.append("population_size must be at least 2")
    bombs = number(evolution["bombs_per_candidate"], "bombs_per_candidate")
    if bombs is not None and bombs < 1:
        issues.append("bombs_per_candidate must be at least 1")
    radius = number(evolution["blast_radius"], "blast_radius")
    if radius is not None and radius <= 0:
        issues.append("blast_radius must be positive")
    generations = number(evolution["max_generations"], "max_generations")
    if generations is not None and generations < 0:
        issues.append("max_generations must not be negative")

    for rate_name in ("crossover_rate", "mutation_rate"):
        rate = number(evolution[rate_name], rate_name)
        if rate is not None and not 0.0 <= normalize_rate(rate) <= 1.0:
            issues.append(f"{rate_name} must be within [0, 1] (or a percentage up to 100)")

    nest_config = config.get("nests") or {}
    sites = nest_config.get("sites")
    if sites is not None:
        if not sites:
            issues.append("nests.sites must not be empty")
        for i, site in enumerate(sites):
            if not isinstance(site, dict) or not all(key in site for key in ("x", "y", "ants")):
                issues.append(f"Nest site {i} must define x, y and ants")
                continue
            number(site["x"], f"Nest site {i} x")
            number(site["y"], f"Nest site {i} y")
            ants = number(site["ants"], f"Nest site {i} ants")
            if ants is not None and ants <= 0:
                issues.append(f"Nest site {i} ants must be positive")

    catalog_size = _catalog_size(nest_config)
    if nest_config.get("count") is not None:
        count = number(nest_config["count"], "nests.count")
        if count is not None and not 1 <= count <= catalog_size:
            issues.append(f"nests.count must be between 1 and {catalog_size}")

    return issues


def run_config_from_dict(config: Dict[str, Any]) -> RunConfig:
    """
    Create a RunConfig from a configuration dictionary

    Raises:
        ConfigurationError: If the configuration has validation issues
    """
    issues = validate_config(config)
    if issues:
        raise ConfigurationError("Invalid configuration:\n  - " + "\n  - ".join(issues))

    grid_config = config.get("grid") or {}
    evolution = get_evolution_config(config)
    nest_config = config.get("nests") or {}

    return RunConfig(
        population_size=int(float(evolution["population_size"])),
        bombs_per_candidate=int(float(evolution["bombs_per_candidate"])),
        blast_radius=float(evolution["blast_radius"]),
        crossover_rate=normalize_rate(evolution["crossover_rate"]),
        mutation_rate=normalize_rate(evolution["mutation_rate"]),
        max_generations=int(float(evolution["max_generations"])),
        nest_count=int(float(nest_config["count"])) if nest_config.get("count") is not None else None,
        grid=GridBounds(
            width=float(grid_config.get("width", 100)),
            height=float(grid_config.get("height", 100))
        ),
        nest_sites=nest_config.get("sites")
    )


def create_run_config_from_file(config_path: str = "config.yaml") -> RunConfig:
    """
    Create a RunConfig from YAML configuration

    Args:
        config_path: Path to the configuration file

    Returns:
        Validated RunConfig
    """
    return run_config_from_dict(load_config(config_path))


def print_config_summary(config: Dict[str, Any], config_path: Optional[str] = None):
    """Print a summary of the configuration"""
    print("=" * 50)
    print("CONFIGURATION SUMMARY")
    print("=" * 50)
    if config_path:
        print(f"Source: {config_path}")

    grid_config = config.get("grid") or {}
    print(f"Grid Size: {grid_config.get('width', 100)} x {grid_config.get('height', 100)}")

    nest_config = config.get("nests") or {}
    catalog_size = _catalog_size(nest_config)
    count = nest_config.get("count", default_nest_count(catalog_size))
    source = "custom sites" if nest_config.get("sites") else "built-in catalog"
    print(f"Nests: {count} of {catalog_size} ({source})")

    evolution = get_evolution_config(config)
    print(f"\nPopulation: {evolution['population_size']}")
    print(f"Generations: {evolution['max_generations']}")
    print(f"Bombs per candidate: {evolution['bombs_per_candidate']}")
    print(f"Blast radius: {evolution['blast_radius']}")
    for rate_name, label in (("crossover_rate", "Crossover rate"), ("mutation_rate", "Mutation rate")):
        rate = _as_number(evolution[rate_name])
        shown = f"{normalize_rate(rate):.0%}" if rate is not None else repr(evolution[rate_name])
        print(f"{label}: {shown}")

    issues = validate_config(config)
    if issues:
        print(f"\nValidation Issues ({len(issues)}):")
        for issue in issues:
            print(f"  - {issue}")
    else:
        print("\nConfiguration is valid ✓")

    print("=" * 50)
