"""Engine configuration and YAML loading."""

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml

from .errors import ConfigError
from .geodesy.calculator import Algorithm, GeoConfig
from .geodesy.ellipsoid import ELLIPSOIDS

log = logging.getLogger(__name__)

ENV_ALGORITHM = "ALMANAC_GEO_ALGORITHM"
ENV_ELLIPSOID = "ALMANAC_ELLIPSOID"


@dataclass(frozen=True)
class EngineConfig:
    """Settings for an Observation.

    Attributes:
        geo: Geodesy settings; the ellipsoid also shapes the observer for parallax
        twilight_depression_deg: Sun depression defining twilight (18 is astronomical)
        event_tolerance_days: Convergence tolerance of the rise/set search
        event_max_iterations: Iteration cap of the rise/set search
        strict: Raise on non-convergence instead of returning the best estimate
    """

    geo: GeoConfig = field(default_factory=GeoConfig)
    twilight_depression_deg: float = 18.0
    event_tolerance_days: float = 1e-6
    event_max_iterations: int = 20
    strict: bool = False


def parse_algorithm(value) -> Algorithm:
    if isinstance(value, Algorithm):
        return value
    try:
        return Algorithm(str(value).strip().lower())
    except ValueError:
        raise ConfigError("geodesy.algorithm", value, [a.value for a in Algorithm]) from None


def parse_ellipsoid(value):
    name = str(value).strip().upper()
    if name not in ELLIPSOIDS:
        raise ConfigError("geodesy.ellipsoid", value, sorted(ELLIPSOIDS))
    return ELLIPSOIDS[name]


def config_from_dict(data: dict | None) -> EngineConfig:
    """Build an EngineConfig from a mapping shaped like the YAML file.

    Missing keys keep their defaults.
    """
    data = data or {}
    geo_data = data.get("geodesy") or {}
    events = data.get("events") or {}

    geo = GeoConfig()
    if "algorithm" in geo_data:
        geo = replace(geo, algorithm=parse_algorithm(geo_data["algorithm"]))
    if "ellipsoid" in geo_data:
        geo = replace(geo, ellipsoid=parse_ellipsoid(geo_data["ellipsoid"]))
    strict = bool(data.get("strict", False))
    geo = replace(geo, strict=bool(geo_data.get("strict", strict)))

    config = EngineConfig(geo=geo, strict=strict)
    if "twilight_depression_deg" in events:
        config = replace(config, twilight_depression_deg=float(events["twilight_depression_deg"]))
    if "tolerance_days" in events:
        config = replace(config, event_tolerance_days=float(events["tolerance_days"]))
    if "max_iterations" in events:
        iterations = int(events["max_iterations"])
        if iterations < 1:
            raise ConfigError("events.max_iterations", iterations, ["a positive integer"])
        config = replace(config, event_max_iterations=iterations)
    return config


def apply_environment(config: EngineConfig, environ=None) -> EngineConfig:
    """Apply ALMANAC_GEO_ALGORITHM and ALMANAC_ELLIPSOID overrides."""
    environ = os.environ if environ is None else environ
    geo = config.geo
    if environ.get(ENV_ALGORITHM):
        geo = replace(geo, algorithm=parse_algorithm(environ[ENV_ALGORITHM]))
        log.debug("Geodesic algorithm overridden from environment: %s", geo.algorithm.value)
    if environ.get(ENV_ELLIPSOID):
        geo = replace(geo, ellipsoid=parse_ellipsoid(environ[ENV_ELLIPSOID]))
        log.debug("Ellipsoid overridden from environment: %s", geo.ellipsoid.name)
    return replace(config, geo=geo)


def load_config(path: str | Path | None = None, environ=None) -> EngineConfig:
    """Load configuration from a YAML file, then apply environment overrides.

    Args:
        path: YAML file; None uses the defaults
        environ: Mapping to read overrides from (defaults to os.environ)

    Returns:
        The resulting EngineConfig

    Raises:
        ConfigError: If a value cannot be interpreted
    """
    data = None
    if path is not None:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        if data is not None and not isinstance(data, dict):
            raise ConfigError(str(path), type(data).__name__, ["a YAML mapping"])
        log.debug("Loaded configuration from %s", path)
    return apply_environment(config_from_dict(data), environ)
