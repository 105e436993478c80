import shutil

import matplotlib.pyplot as plt
import numpy as np
import pytest

from particle_life.core import PhysicsParams, TypeInteractionModel, World, run_simulation
from particle_life.render.renderer import ParticleRenderer, RendererConfig
from particle_life.render.viewer import ParticleLifeViewer
from particle_life.visual.colors import TypeColors, rgb_to_hex


def test_type_colors_partition_hue():
    colors = TypeColors(4, offset=0.0)
    assert colors.color(0) == pytest.approx((1.0, 0.0, 0.0))
    assert colors.color(2) == pytest.approx((0.0, 1.0, 1.0))
    assert rgb_to_hex(colors.color(0)) == "#ff0000"
    assert colors.as_uint8()[0] == (255, 0, 0)
    assert len({colors.color(i) for i in range(4)}) == 4


def test_type_colors_for_particles():
    colors = TypeColors(3)
    rgb = colors.for_particles(np.array([0, 2, 2, 1], dtype=np.uint8))
    assert rgb.shape == (4, 3)
    assert tuple(rgb[1]) == colors.color(2)
    with pytest.raises(ValueError):
        colors.color(3)


def test_type_colors_random_offset_in_unit_interval():
    assert 0.0 <= TypeColors(5).offset < 1.0


@pytest.fixture
def small_sim():
    params = PhysicsParams()
    model = TypeInteractionModel(3, params=params)
    world = World(40.0, 30.0)
    return world, model, params, world.create_particles(model, 60)


def test_renderer_draws_frame(small_sim):
    world, model, params, particles = small_sim
    renderer = ParticleRenderer(world, TypeColors(3), RendererConfig(width_px=200, height_px=150))
    (scatter,) = renderer.draw(particles.pos, particles.types)
    assert scatter.get_offsets().shape == (60, 2)
    assert renderer.ax.get_xlim() == (0.0, 40.0)
    plt.close(renderer.fig)


def test_viewer_ticks_and_randomizes(small_sim, capsys):
    world, model, params, particles = small_sim
    viewer = ParticleLifeViewer(world, model, params, particles, ParticleRenderer(world, TypeColors(3)))
    viewer.advance(2)
    assert viewer.tick == 2
    assert len(viewer.particles) == 60

    viewer.sliders["friction"].set_val(0.5)
    assert viewer.params.friction == 0.5

    before = model.attraction_matrix.copy()
    assert viewer.randomize()
    assert not np.array_equal(model.attraction_matrix, before)

    viewer.params = PhysicsParams(min_radius_lower=9.0, min_radius_upper=1.0)
    after = model.attraction_matrix.copy()
    assert not viewer.randomize()
    assert np.array_equal(model.attraction_matrix, after)
    assert "Randomize skipped" in capsys.readouterr().out
    plt.close(viewer.fig)


@pytest.mark.skipif(shutil.which("ffmpeg") is None, reason="ffmpeg not installed")
def test_render_video(small_sim, tmp_path):
    from particle_life.render.video import render_video

    world, model, params, particles = small_sim
    _, rec = run_simulation(world, model, params, particles, n_steps=4, log_interval=0)
    out = render_video(rec, ParticleRenderer(world, TypeColors(3)), output_path=tmp_path / "run.mp4",
                       fps=10, preview=True)
    assert out.exists() and out.stat().st_size > 0


def test_marker_size_follows_drawn_axes():
    params = PhysicsParams()
    model = TypeInteractionModel(2, params=params)
    world = World(100.0, 100.0)
    particles = world.create_particles(model, 10)
    renderer = ParticleRenderer(world, TypeColors(2))
    viewer = ParticleLifeViewer(world, model, params, particles, renderer)

    fig_w, fig_h = viewer.fig.get_size_inches()
    box = renderer.ax.get_position()
    drawn_in = min(box.width * fig_w, box.height * fig_h)
    (scatter,) = viewer.advance(0)
    assert scatter.get_sizes()[0] == pytest.approx((drawn_in * 72.0 / 100.0) ** 2)

    # same world in the default standalone figure gets a different size
    standalone = ParticleRenderer(world, TypeColors(2))
    (other,) = standalone.draw(particles.pos, particles.types)
    assert other.get_sizes()[0] != pytest.approx(scatter.get_sizes()[0])
    plt.close(viewer.fig)
    plt.close(standalone.fig)
