from __future__ import annotations
from pathlib import Path
import math

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.patches import Circle, Rectangle

from asteroid_arena.core.recording import FrameSnapshot

KIND_COLORS = {
    "ship": "white",
    "asteroid": "silver",
    "player_bullet": "white",
    "enemy_bullet": (1.0, 0.31, 0.31),
    "saucer": (0.75, 0.75, 0.75),
}


def plot_frame(snapshot: FrameSnapshot, width: float, height: float, ax: Axes | None = None):
    """
    Draw one frame: arena outline, every entity as a circle, the ship's
    heading as a nose line, and the score/lives/wave as the title.
    Coordinate system: x-right, y-down.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(width / 100, height / 100))
    else:
        fig = ax.figure

    ax.set_facecolor("black")
    ax.add_patch(Rectangle((0.0, 0.0), width, height, fill=False, edgecolor="gray", linestyle="--"))

    for ent in snapshot.entities.values():
        color = KIND_COLORS.get(ent.kind, "white")
        filled = ent.kind in ("player_bullet", "enemy_bullet")
        ax.add_patch(Circle(
            ent.pos,
            ent.radius,
            edgecolor=color,
            facecolor=color if filled else "none",
            linewidth=0.8,
            alpha=0.45 if ent.invulnerable else 1.0,
        ))
        if ent.kind == "ship":
            rad = math.radians(ent.heading)
            nose = (ent.pos[0] + math.cos(rad) * ent.radius, ent.pos[1] + math.sin(rad) * ent.radius)
            ax.plot([ent.pos[0], nose[0]], [ent.pos[1], nose[1]], color=color, linewidth=1.2)

    ax.set_xlim(0.0, width)
    ax.set_ylim(0.0, height)
    ax.set_aspect("equal", adjustable="box")
    ax.invert_yaxis()
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_title(
        f"Score {snapshot.score}   Lives {snapshot.lives}   Wave {snapshot.wave}   [{snapshot.phase}]",
        fontsize=9,
    )
    return fig, ax


def save_frame(snapshot: FrameSnapshot, width: float, height: float, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig, _ = plot_frame(snapshot, width, height)
    fig.savefig(path, dpi=100)
    plt.close(fig)
    return path
