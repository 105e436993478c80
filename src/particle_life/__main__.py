# src/particle_life/__main__.py

from __future__ import annotations

from dataclasses import asdict, replace

from particle_life.core import SimConfig, run_simulation
from particle_life.presets.basic import make_simulation
from particle_life.utils.cli import build_parser
from particle_life.utils.preset_loader import load_preset
from particle_life.utils.random import seed_all
from particle_life.visual.colors import TypeColors


def config_from_args(args) -> SimConfig:
    base = SimConfig.from_dict(load_preset(args.preset).resolved) if args.preset else SimConfig()
    # width without height means a square world, as in SimConfig.from_dict
    if args.width is not None and args.height is None:
        base = replace(base, height=args.width)
    return SimConfig.from_args(args, base=base).validate()


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    sim_config = config_from_args(args)

    seed_all(sim_config.seed)

    # 1. Build world, interaction model and particles
    world, model, particles = make_simulation(sim_config)
    colors = TypeColors(sim_config.num_types)
    print(f"{sim_config.num_particles} particles, {sim_config.num_types} types, "
          f"world {world.width:g}x{world.height:g} ({'wrap' if world.wrap else 'walls'})")

    if args.video is None:
        # 2a. Interactive viewer with control panel
        from particle_life.render.viewer import run_viewer
        run_viewer(world, model, sim_config.physics, particles, colors)
        return

    # 2b. Simulate, then render to video
    from particle_life.render.renderer import ParticleRenderer
    from particle_life.render.video import render_video

    _, recording = run_simulation(world, model, sim_config.physics, particles,
                                  n_steps=args.steps, log_interval=args.fps * 10)
    recording.meta = {"sim_config": asdict(sim_config)}
    print("Simulation completed. Rendering video...")
    out = render_video(recording, ParticleRenderer(world, colors),
                       output_path=args.video, fps=args.fps, preview=args.preview)
    print(f"Wrote {out}")


if __name__ == "__main__":
    main()
