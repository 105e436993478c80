# src/particle_life/core/config.py

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
import math
from typing import Any, Mapping, Optional


class ConfigError(ValueError):
    """Raised for invalid simulation or distribution parameters."""


@dataclass
class PhysicsParams:
    """
    Scalar knobs of the force model.

    The attraction/radius fields parameterize `TypeInteractionModel.randomize`;
    `friction` is applied by the integration phase every tick.
    """
    mean_attraction: float = 0.0
    std_attraction: float = 0.04
    min_radius_lower: float = 0.0
    min_radius_upper: float = 10.0
    max_radius_lower: float = 10.0
    max_radius_upper: float = 40.0
    friction: float = 0.05

    def validate(self) -> "PhysicsParams":
        for f in fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value):
                raise ConfigError(f"{f.name} must be finite, got {value!r}")
        if self.std_attraction <= 0.0:
            raise ConfigError(f"std_attraction must be > 0, got {self.std_attraction}")
        if self.min_radius_lower > self.min_radius_upper:
            raise ConfigError(
                f"min radius range is inverted: {self.min_radius_lower} > {self.min_radius_upper}"
            )
        if self.max_radius_lower > self.max_radius_upper:
            raise ConfigError(
                f"max radius range is inverted: {self.max_radius_lower} > {self.max_radius_upper}"
            )
        if not (0.0 <= self.friction <= 1.0):
            raise ConfigError(f"friction must be in [0, 1], got {self.friction}")
        return self


@dataclass
class SimConfig:
    num_particles: int = 1024
    num_types: int = 8
    width: float = 128.0
    height: float = 128.0
    wrap: bool = True
    seed: int | None = None
    n_threads: int | None = None
    physics: PhysicsParams = field(default_factory=PhysicsParams)

    def validate(self) -> "SimConfig":
        if self.num_particles <= 0:
            raise ConfigError(f"num_particles must be > 0, got {self.num_particles}")
        if not (1 <= self.num_types <= 256):
            raise ConfigError(f"num_types must be in [1, 256], got {self.num_types}")
        if not (self.width > 0.0 and self.height > 0.0):
            raise ConfigError(f"world extent must be positive, got {self.width}x{self.height}")
        if self.n_threads is not None and self.n_threads <= 0:
            raise ConfigError(f"n_threads must be > 0, got {self.n_threads}")
        self.physics.validate()
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimConfig":
        """
        Build from a (YAML-style) mapping with an optional nested `physics:` section.
        A width without a height gives a square world.
        """
        data = dict(data)
        physics_data = data.pop("physics", None) or {}
        if "width" in data and "height" not in data:
            data["height"] = data["width"]
        top = {f.name for f in fields(cls)} - {"physics"}
        unknown = set(data) - top
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")
        phys_names = {f.name for f in fields(PhysicsParams)}
        unknown = set(physics_data) - phys_names
        if unknown:
            raise ConfigError(f"Unknown physics keys: {sorted(unknown)}")
        physics = PhysicsParams(**{k: float(v) for k, v in physics_data.items()})
        return cls(physics=physics, **data)

    @classmethod
    def from_args(cls, args, base: Optional["SimConfig"] = None) -> "SimConfig":
        """
        Overlay an argparse namespace on `base` (or the defaults).
        Attributes that are missing or None are left untouched, so a preset
        only gets overridden by flags the user actually passed.
        """
        cfg = base if base is not None else cls()
        kwargs = {}
        for f in fields(cls):
            name = f.name
            if name == "physics":
                continue
            if getattr(args, name, None) is not None:
                kwargs[name] = getattr(args, name)
        phys_kwargs = {}
        for f in fields(PhysicsParams):
            if getattr(args, f.name, None) is not None:
                phys_kwargs[f.name] = getattr(args, f.name)
        return replace(cfg, physics=replace(cfg.physics, **phys_kwargs), **kwargs)
