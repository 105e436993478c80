# src/particle_life/render/renderer.py

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from particle_life.core.particles import PARTICLE_DIAMETER
from particle_life.visual.colors import TypeColors

if TYPE_CHECKING:
    from particle_life.core.world import World


def fig_inches_from_pixels(width_px: int | None = None,
                           height_px: int | None = None,
                           dpi: int = 100,
                           figsize_default: tuple[float, float] = (6.0, 6.0)) -> tuple[float, float]:
    if width_px is not None and height_px is not None:
        return (width_px / dpi, height_px / dpi)
    else:
        return figsize_default


@dataclass
class RendererConfig:
    figsize: tuple[float, float] = (6.0, 6.0)
    dpi: int = 100
    width_px: int | None = None
    height_px: int | None = None
    background_color: str = "black"
    show_axes: bool = False


class ParticleRenderer:
    """
    Draws particle positions as dots coloured by type.

    The scatter artist is created once and only its offsets/colours are
    updated per frame, so it is cheap enough for live animation.
    """

    def __init__(self, world: World, colors: TypeColors, config: RendererConfig | None = None):
        self.world = world
        self.colors = colors
        self.config = config or RendererConfig()
        self.fig: Figure | None = None
        self.ax: Axes | None = None
        self._scatter = None

    def init_figure(self, ax: Axes | None = None) -> tuple[Figure, Axes]:
        if ax is None:
            fig, ax = plt.subplots(
                figsize=fig_inches_from_pixels(width_px=self.config.width_px,
                                               height_px=self.config.height_px,
                                               dpi=self.config.dpi,
                                               figsize_default=self.config.figsize),
                dpi=self.config.dpi,
            )
        else:
            fig = ax.figure
        fig.patch.set_facecolor(self.config.background_color)
        self.fig, self.ax = fig, ax
        self._setup_axes(ax)
        self._scatter = ax.scatter([], [], s=self._marker_size(), linewidths=0)
        return fig, ax

    def _setup_axes(self, ax: Axes) -> None:
        width, height = self.world.extent()
        ax.set_facecolor(self.config.background_color)
        ax.set_xlim(0.0, width)
        ax.set_ylim(height, 0.0)  # y increases downward
        ax.set_aspect("equal", adjustable="box")
        if not self.config.show_axes:
            ax.set_axis_off()

    def _marker_size(self) -> float:
        # scatter sizes are in points^2; map the particle diameter from world units
        width, height = self.world.extent()
        fig_w_in, fig_h_in = self.fig.get_size_inches()
        box = self.ax.get_position()
        ax_w_in, ax_h_in = box.width * fig_w_in, box.height * fig_h_in
        # equal aspect shrinks the axes box to the world's proportions
        drawn_w_in = min(ax_w_in, ax_h_in * width / height)
        points_per_unit = drawn_w_in * 72.0 / width
        return max((PARTICLE_DIAMETER * points_per_unit) ** 2, 1.0)

    def draw(self, pos: np.ndarray, types: np.ndarray):
        """Update the scatter with one frame; returns the artists that changed."""
        if self._scatter is None:
            self.init_figure()
        self._scatter.set_offsets(np.asarray(pos, dtype=float).reshape(-1, 2))
        self._scatter.set_facecolors(self.colors.for_particles(types))
        return (self._scatter,)
