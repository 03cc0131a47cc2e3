"""
Visualization for the bombing GA

Draws nests, their ant populations, the best candidate's bombs with
their blast radii, and fitness curves over generations.
"""

import math
from typing import List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt

from .data_models import GenerationStats
from .geometry import GridBounds, Point

NEST_COLOR = "#8b4513"
ANT_COLOR = "#00ff00"
BOMB_COLOR = "#ff4444"
BOMB_CORE_COLOR = "#ffff00"
BACKGROUND_COLOR = "#0a0a0a"

MAX_ANT_MARKERS = 10
ANTS_PER_MARKER = 100


def ant_marker_positions(nest: Point, offset: float) -> List[Tuple[float, float]]:
    """
    Positions of the small ant markers ringing a nest.

    One marker per hundred ants (rounded up), at most ten, spread evenly
    on a circle of radius ``offset``.
    """
    count = min(MAX_ANT_MARKERS, math.ceil(nest.ants / ANTS_PER_MARKER))
    positions = []
    for i in range(count):
        angle = (i / count) * math.pi * 2
        positions.append((nest.x + math.cos(angle) * offset,
                          nest.y + math.sin(angle) * offset))
    return positions


class SolutionVisualizer:
    """Renders nests and bomb placements on the simulation grid"""

    def __init__(self, bounds: GridBounds, nests: Sequence[Point], blast_radius: float):
        self.bounds = bounds
        self.nests = list(nests)
        self.blast_radius = blast_radius

    def plot_solution(self,
                      bombs: Sequence[Tuple[float, float]],
                      ax: plt.Axes = None,
                      title: Optional[str] = None):
        """
        Plot nests with ant markers and bombs with blast radii

        Returns:
            Figure holding ``ax``; a new figure when ``ax`` is None, which
            the caller is responsible for closing
        """
        if ax is None:
            _, ax = plt.subplots(figsize=(10, 8))

        ax.set_facecolor(BACKGROUND_COLOR)
        marker_offset = max(self.bounds.width, self.bounds.height) * 0.02

        # Blast radii first so they sit behind everything else
        for x, y in bombs:
            ax.add_patch(plt.Circle((x, y), self.blast_radius,
                                    facecolor=BOMB_COLOR, alpha=0.15,
                                    edgecolor=BOMB_COLOR, linewidth=2))

        for nest in self.nests:
            ax.scatter([nest.x], [nest.y], c=NEST_COLOR, s=120, zorder=3)
            markers = ant_marker_positions(nest, marker_offset)
            if markers:
                xs, ys = zip(*markers)
                ax.scatter(xs, ys, c=ANT_COLOR, s=6, zorder=3)

        if bombs:
            xs, ys = zip(*bombs)
            ax.scatter(xs, ys, c=BOMB_COLOR, s=80, zorder=4, label=f"bombs ({len(bombs)})")
            ax.scatter(xs, ys, c=BOMB_CORE_COLOR, s=8, zorder=5)

        ax.set_xlim(0, self.bounds.width)
        ax.set_ylim(0, self.bounds.height)
        # Screen coordinates: y grows downward
        ax.invert_yaxis()
        ax.set_aspect("equal")
        if title:
            ax.set_title(title)
        return ax.figure

    def plot_fitness_history(self,
                             history: Sequence[GenerationStats],
                             ax: plt.Axes = None):
        """Plot best-ever, population-best and mean fitness per generation; returns the figure"""
        if ax is None:
            _, ax = plt.subplots(figsize=(10, 4))

        generations = [s.generation for s in history]
        ax.plot(generations, [s.best_fitness for s in history], label="best ever", color="red")
        ax.plot(generations, [s.population_best for s in history], label="population best",
                color="orange", alpha=0.7)
        ax.plot(generations, [s.mean_fitness for s in history], label="mean", color="blue", alpha=0.7)

        ax.set_xlabel("Generation")
        ax.set_ylabel("Kills")
        ax.legend(loc="lower right")
        ax.grid(True, alpha=0.3)
        return ax.figure

    def plot_run_overview(self,
                          bombs: Sequence[Tuple[float, float]],
                          history: Sequence[GenerationStats],
                          figsize: Tuple[int, int] = (10, 12),
                          save_path: Optional[str] = None,
                          show: bool = False):
        """
        Two-panel figure: best solution on top, fitness curves below

        Args:
            bombs: Bomb positions of the best candidate
            history: Generation statistics
            figsize: Figure size (width, height)
            save_path: Optional path to save the figure
            show: Display the figure interactively
        """
        fig = plt.figure(figsize=figsize)
        gs = fig.add_gridspec(2, 1, height_ratios=[3, 1])

        title = None
        if history:
            last = history[-1]
            title = (f"Generation {last.generation}: best {last.best_fitness:.0f} kills "
                     f"({last.kill_rate:.1f}%)")

        self.plot_solution(bombs, fig.add_subplot(gs[0]), title=title)
        self.plot_fitness_history(history, fig.add_subplot(gs[1]))

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')

        if show:
            plt.show()
        else:
            plt.close(fig)

        return fig
