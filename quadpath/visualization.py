from pathlib import Path
from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import matplotlib.patches as patches
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from .algorithms.graph import Graph, VertexKind
from .algorithms.quadtree import QuadTree, Status
from .models import Field, Point


def plot_field(
    field: Field,
    tree: Optional[QuadTree] = None,
    graph: Optional[Graph] = None,
    path: Optional[Sequence[Point]] = None,
    save_to: Optional[str | Path] = None,
    show: bool = True,
) -> Tuple[Figure, Axes]:
    """Plot the field, obstacles, quadtree leaves, graph edges and a path."""
    n = field.size
    start, goal = field.start, field.destination
    if graph is not None:
        start, goal = graph.start.position, graph.dest.position

    fontsize = 16

    fig, ax = plt.subplots(figsize=(10, 10))

    # Add padding so points at boundaries are visible
    padding = n * 0.02
    ax.set_xlim(-padding, n + padding)
    ax.set_ylim(-padding, n + padding)
    ax.set_aspect("equal")
    ax.tick_params(axis="both", labelsize=fontsize)

    border = patches.Rectangle(
        (0, 0), n, n,
        linewidth=2,
        edgecolor="black",
        facecolor="none",
    )
    ax.add_patch(border)

    # Quadtree leaves
    if tree is not None:
        for leaf in tree.leaves():
            b = leaf.bounds
            blocked = leaf.status is Status.BLOCKED
            ax.add_patch(patches.Rectangle(
                (b.x, b.y), b.width, b.height,
                linewidth=0.5,
                edgecolor="lightgray",
                facecolor="mistyrose" if blocked else "none",
                alpha=0.8,
            ))

    for obs in field.obstacles:
        rect = patches.Rectangle(
            (obs.x, obs.y), obs.width, obs.height,
            linewidth=1,
            edgecolor="darkgray",
            facecolor="gray",
            alpha=0.7,
        )
        ax.add_patch(rect)

    # Region adjacency edges
    if graph is not None:
        for e in graph.edges():
            p1 = graph.vertices[e.source].position
            p2 = graph.vertices[e.target].position
            ax.plot(
                [p1.x, p2.x], [p1.y, p2.y],
                color="lightblue",
                linewidth=0.5,
                alpha=0.5,
            )
        centers = [v.position for v in graph.vertices if v.kind is VertexKind.REGION]
        if centers:
            ax.scatter([p.x for p in centers], [p.y for p in centers], s=4, color="steelblue", zorder=3)

    if path and len(path) >= 2:
        xs = [p.x for p in path]
        ys = [p.y for p in path]
        ax.plot(xs, ys, color="blue", linewidth=2, marker=".", label="Path", zorder=5)

    ax.plot(
        start.x, start.y,
        marker="o",
        markersize=12,
        color="green",
        label="Start",
        zorder=10,
    )
    ax.plot(
        goal.x, goal.y,
        marker="*",
        markersize=15,
        color="red",
        label="Goal",
        zorder=10,
    )

    ax.set_xlabel("X", fontsize=fontsize)
    ax.set_ylabel("Y", fontsize=fontsize)
    ax.set_title(f"Quadtree Path ({n:g} x {n:g})", fontsize=fontsize + 4)
    ax.legend(loc="best", fontsize=fontsize)

    if save_to:
        fig.savefig(save_to, dpi=150, bbox_inches="tight")

    if show:
        plt.show()

    return fig, ax
