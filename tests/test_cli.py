from pathlib import Path

from particle_life.__main__ import config_from_args
from particle_life.utils.cli import build_parser

PRESETS = Path(__file__).resolve().parent.parent / "presets"


def _cfg(*argv):
    return config_from_args(build_parser().parse_args(list(argv)))


def test_defaults():
    cfg = _cfg()
    assert cfg.num_particles == 1024
    assert cfg.wrap is True
    assert cfg.seed is None


def test_width_implies_square_world():
    cfg = _cfg("--width", "64")
    assert (cfg.width, cfg.height) == (64.0, 64.0)
    cfg = _cfg("--width", "64", "--height", "32")
    assert (cfg.width, cfg.height) == (64.0, 32.0)


def test_flags_override_preset():
    cfg = _cfg("--preset", str(PRESETS / "dense_walls.yaml"), "--num_types", "4", "--friction", "0.3", "--seed", "5")
    assert cfg.num_particles == 2048
    assert cfg.num_types == 4
    assert cfg.wrap is False
    assert cfg.physics.friction == 0.3
    assert cfg.seed == 5


def test_no_wrap_and_threads():
    cfg = _cfg("--no-wrap", "--threads", "2")
    assert cfg.wrap is False
    assert cfg.n_threads == 2


def test_wrap_flag_overrides_walled_preset():
    cfg = _cfg("--preset", str(PRESETS / "dense_walls.yaml"), "--wrap")
    assert cfg.wrap is True
    cfg = _cfg("--preset", str(PRESETS / "dense_walls.yaml"))
    assert cfg.wrap is False


def test_width_with_preset_is_square():
    cfg = _cfg("--preset", str(PRESETS / "default.yaml"), "--width", "64")
    assert (cfg.width, cfg.height) == (64.0, 64.0)
