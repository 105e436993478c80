# src/particle_life/visual/colors.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

import numpy as np
from matplotlib import colors as mcolors

from particle_life.utils.random import rng


@dataclass(frozen=True, eq=False)
class TypeColors:
    """
    One display colour per particle type.

    Hues partition the colour wheel evenly, rotated by `offset` so each run
    gets a different palette:

        colors = TypeColors(8)
        r, g, b = colors.color(3)   # floats in [0, 1]

    Saturation and value are fixed so every type stays bright on black.
    """
    n_types: int
    offset: float | None = None
    saturation: float = 1.0
    value: float = 1.0
    _rgb: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        if self.n_types <= 0:
            raise ValueError(f"n_types must be > 0, got {self.n_types}")
        offset = self.offset if self.offset is not None else float(rng("color").random())
        object.__setattr__(self, "offset", offset)
        hues = np.mod(np.arange(self.n_types) / self.n_types + offset, 1.0)
        hsv = np.stack(
            [hues, np.full_like(hues, self.saturation), np.full_like(hues, self.value)],
            axis=-1,
        )
        object.__setattr__(self, "_rgb", mcolors.hsv_to_rgb(hsv))

    def color(self, type_id: int) -> tuple[float, float, float]:
        if not (0 <= type_id < self.n_types):
            raise ValueError(f"type id {type_id} out of range for {self.n_types} types")
        r, g, b = self._rgb[type_id]
        return (float(r), float(g), float(b))

    def for_particles(self, types: Iterable[int]) -> np.ndarray:
        """(n, 3) RGB rows for an array of type ids, for scatter plots."""
        return self._rgb[np.asarray(types, dtype=np.intp)]

    def as_uint8(self) -> list[tuple[int, int, int]]:
        return [tuple(int(round(255 * c)) for c in row) for row in self._rgb]


def rgb_to_hex(rgb: Iterable[float]) -> str:
    """Convert (r,g,b) in [0,1] to '#RRGGBB'."""
    return mcolors.to_hex(tuple(rgb))
