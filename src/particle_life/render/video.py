# src/particle_life/render/video.py

from __future__ import annotations

from pathlib import Path
import shutil

import matplotlib.pyplot as plt
from matplotlib.animation import FFMpegWriter

from .renderer import ParticleRenderer
from particle_life.core.world import SimulationRecording

PREVIEW_FFMPEG_ARGS = [
    "-crf", "35",
    "-preset", "ultrafast",
    "-tune", "zerolatency",
    "-pix_fmt", "yuv420p",
]
FINAL_FFMPEG_ARGS = [
    "-crf", "18",
    "-preset", "slow",
    "-pix_fmt", "yuv420p",
]


def render_video(
    recording: SimulationRecording,
    renderer: ParticleRenderer,
    *,
    output_path: str | Path,
    fps: int = 60,
    bitrate: int | None = None,
    preview: bool = False,
    log_interval: int = 1 #seconds
) -> Path:
    """
    Render a SimulationRecording to an MP4 using Matplotlib + ffmpeg.

    Requirements:
        - ffmpeg installed and discoverable by Matplotlib.
    """
    if shutil.which("ffmpeg") is None:
        raise RuntimeError(
            "ffmpeg not found. Install with: conda install -c conda-forge ffmpeg"
        )
    output_path = Path(output_path)
    writer = FFMpegWriter(
        fps=fps,
        metadata={"artist": "particle_life"},
        bitrate=bitrate,
        extra_args=PREVIEW_FFMPEG_ARGS if preview else FINAL_FFMPEG_ARGS,
    )

    if renderer.fig is None:
        renderer.init_figure()
    with writer.saving(renderer.fig, str(output_path), renderer.config.dpi):
        for idx, frame in enumerate(recording):
            renderer.draw(frame.pos, frame.types)
            if (idx + 1) % (fps * log_interval) == 0:
                print(f"Rendered {(idx + 1) / fps:.1f} seconds of video...")
            writer.grab_frame()
    plt.close(renderer.fig)
    return output_path
