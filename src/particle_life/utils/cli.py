import argparse


def build_parser():
    """
    Flags default to None so that only explicitly passed values override a preset
    (see `SimConfig.from_args`).
    """
    parser = argparse.ArgumentParser(description='Particle life simulation')
    parser.add_argument('--preset', type=str, default=None, metavar='PATH',
                        help='YAML preset to start from (default: built-in defaults)')
    parser.add_argument('--num_particles', type=int, default=None, metavar='N',
                        help='number of particles (default: 1024)')
    parser.add_argument('--num_types', type=int, default=None, metavar='N',
                        help='number of particle types (default: 8)')
    parser.add_argument('--width', type=float, default=None, metavar='W',
                        help='world width (default: 128)')
    parser.add_argument('--height', type=float, default=None, metavar='H',
                        help='world height (default: same as width)')
    parser.add_argument('--wrap', action=argparse.BooleanOptionalAction, default=None,
                        help='toroidal world (--wrap) or reflective walls (--no-wrap) (default: wrap)')
    parser.add_argument('--seed', type=int, default=None, metavar='N',
                        help='random seed (default: unseeded)')
    parser.add_argument('--threads', dest='n_threads', type=int, default=None, metavar='N',
                        help='worker threads for the physics kernels (default: all cores)')
    parser.add_argument('--steps', type=int, default=600, metavar='N',
                        help='ticks to simulate when exporting video (default: 600)')
    parser.add_argument('--video', type=str, default=None, metavar='PATH',
                        help='write an MP4 instead of opening the interactive viewer')
    parser.add_argument('--fps', type=int, default=60, metavar='N',
                        help='frame rate for video export (default: 60)')
    parser.add_argument('--preview', action='store_true',
                        help='faster, lower quality video encoding')

    physics = parser.add_argument_group('physics')
    physics.add_argument('--mean_attraction', type=float, default=None)
    physics.add_argument('--std_attraction', type=float, default=None)
    physics.add_argument('--min_radius_lower', type=float, default=None)
    physics.add_argument('--min_radius_upper', type=float, default=None)
    physics.add_argument('--max_radius_lower', type=float, default=None)
    physics.add_argument('--max_radius_upper', type=float, default=None)
    physics.add_argument('--friction', type=float, default=None)
    return parser

'''
usage: particle-life --num_particles 2048 --num_types 6 --width 192 --seed 7
       particle-life --preset presets/default.yaml --video out/run.mp4 --steps 1200
'''
