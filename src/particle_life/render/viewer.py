# src/particle_life/render/viewer.py

from __future__ import annotations

from dataclasses import fields, replace

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.widgets import Button, Slider

from particle_life.core.config import ConfigError, PhysicsParams
from particle_life.core.interactions import TypeInteractionModel
from particle_life.core.particles import ParticleArray
from particle_life.core.world import World
from .renderer import ParticleRenderer, RendererConfig

# (label, min, max) per physics parameter
SLIDER_RANGES = {
    "mean_attraction": ("Mean Attraction", -0.2, 0.2),
    "std_attraction": ("Sigma Attraction", 0.001, 0.2),
    "min_radius_lower": ("Min Radius Lower", 0.0, 20.0),
    "min_radius_upper": ("Min Radius Upper", 0.0, 20.0),
    "max_radius_lower": ("Max Radius Lower", 0.0, 80.0),
    "max_radius_upper": ("Max Radius Upper", 0.0, 80.0),
    "friction": ("Friction", 0.0, 1.0),
}


class ParticleLifeViewer:
    """
    Live window: the world on the left, a control panel on the right.

    Slider edits take effect on the next tick (friction) or on the next
    Randomize click (distribution parameters).
    """

    def __init__(
        self,
        world: World,
        model: TypeInteractionModel,
        params: PhysicsParams,
        particles: ParticleArray,
        renderer: ParticleRenderer,
    ):
        self.world = world
        self.model = model
        self.params = params
        self.particles = particles
        self.renderer = renderer
        self.tick = 0
        self.sliders: dict[str, Slider] = {}

        fig = plt.figure(figsize=(10.0, 6.5), dpi=renderer.config.dpi)
        ax_world = fig.add_axes([0.02, 0.05, 0.6, 0.9])
        renderer.init_figure(ax=ax_world)
        self.fig = fig

        top = 0.88
        for k, f in enumerate(fields(PhysicsParams)):
            label, lo, hi = SLIDER_RANGES[f.name]
            ax = fig.add_axes([0.78, top - k * 0.08, 0.17, 0.03])
            value = getattr(params, f.name)
            slider = Slider(ax, label, min(lo, value), max(hi, value), valinit=value)
            slider.label.set_color("white")
            slider.valtext.set_color("white")
            slider.on_changed(self._on_slider)
            self.sliders[f.name] = slider
        ax_button = fig.add_axes([0.78, top - len(self.sliders) * 0.08, 0.17, 0.05])
        self.randomize_button = Button(ax_button, "Randomize")
        self.randomize_button.on_clicked(lambda _event: self.randomize())
        self.renderer.draw(self.particles.pos, self.particles.types)

    def _on_slider(self, _value) -> None:
        self.params = replace(
            self.params,
            **{name: float(s.val) for name, s in self.sliders.items()},
        )

    def randomize(self) -> bool:
        """Redraw the interaction matrices from the current panel values."""
        try:
            self.model.randomize(self.params)
        except ConfigError as e:
            print(f"Randomize skipped: {e}")
            return False
        return True

    def advance(self, n_ticks: int = 1):
        for _ in range(n_ticks):
            self.particles = self.world.step(self.model, self.params, self.particles)
            self.tick += 1
        return self.renderer.draw(self.particles.pos, self.particles.types)

    def run(self, interval_ms: int = 16, ticks_per_frame: int = 1) -> None:
        self._anim = FuncAnimation(
            self.fig,
            lambda _frame: self.advance(ticks_per_frame),
            interval=interval_ms,
            blit=False,
            cache_frame_data=False,
        )
        plt.show()


def run_viewer(world, model, params, particles, colors, config: RendererConfig | None = None, **kwargs) -> ParticleLifeViewer:
    viewer = ParticleLifeViewer(world, model, params, particles, ParticleRenderer(world, colors, config))
    viewer.run(**kwargs)
    return viewer
