#!/usr/bin/env python3
"""
Demo script showing road search over procedural terrain.
"""

import argparse
import math

import numpy as np
from py_road.core import CAP_FROM_SETTINGS, GridNoiseHeightmap, PathNotFoundError, RoadBuilder
from py_road.utils import configure_logging


def hills(i, j):
    """Two overlapping sine fields, indexed by lattice row and column."""
    return 0.15 * math.sin(i * 0.35) * math.cos(j * 0.25) + 0.05 * math.sin((i + j) * 0.6)


def plot_road(heightmap, geometry, output, extent=(-0.2, 1.2)):
    """Render the heightmap with the road on top and save it to ``output``."""
    import matplotlib.pyplot as plt

    lo, hi = extent
    xs = np.linspace(lo, hi, 200)
    zs = np.linspace(lo, hi, 200)
    heights = np.array([[heightmap.height(x, z) for x in xs] for z in zs])

    fig, ax = plt.subplots(figsize=(8, 8))
    im = ax.imshow(heights, origin="lower", extent=(lo, hi, lo, hi), cmap="terrain")
    fig.colorbar(im, ax=ax, label="Elevation")

    vertices = geometry.polyline.vertices
    ax.plot(vertices[:, 0], vertices[:, 2], color="black", linewidth=2, label="Road")
    for marker in geometry.markers:
        ax.scatter([marker.center.x], [marker.center.z], color="red", s=60, zorder=3)

    ax.set_xlabel("x")
    ax.set_ylabel("z")
    ax.set_title(f"Road cost {geometry.path.cost:.3f}, {len(vertices)} vertices")
    ax.legend()
    fig.savefig(output, dpi=150, bbox_inches="tight")
    plt.close(fig)


def main():
    """Find and print a road between two points."""
    parser = argparse.ArgumentParser(description="Procedural road demo")
    parser.add_argument("--src", type=float, nargs=2, default=[0.1, 0.1], metavar=("X", "Z"))
    parser.add_argument("--dst", type=float, nargs=2, default=[0.9, 0.9], metavar=("X", "Z"))
    parser.add_argument("--scale", type=float, default=None, help="Grid cell size")
    parser.add_argument("--max-expansions", type=int, default=None)
    parser.add_argument("--plot", default=None, help="Save a PNG of the road to this path")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args()

    configure_logging(level=args.log_level)

    heightmap = GridNoiseHeightmap(hills)
    max_expansions = args.max_expansions if args.max_expansions is not None else CAP_FROM_SETTINGS
    builder = RoadBuilder(heightmap, scale=args.scale, max_expansions=max_expansions)

    print("Py-Road Demo")
    print("=" * 40)

    try:
        geometry = builder.build(
            (args.src[0], 0.0, args.src[1]), (args.dst[0], 0.0, args.dst[1])
        )
    except PathNotFoundError as e:
        print(f"No road: {e}")
        return 1

    print(f"Grid scale: {builder.scale}")
    print(f"Path cost: {geometry.path.cost:.4f}")
    print(f"Vertices: {len(geometry.polyline)}")
    print(f"3D length: {geometry.polyline.length():.4f}")
    print("\nVertices (x, y, z):")
    for x, y, z in geometry.polyline.vertices:
        print(f"  {x:7.3f} {y:7.3f} {z:7.3f}")

    if args.plot:
        plot_road(heightmap, geometry, args.plot)
        print(f"\nSaved plot to {args.plot}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
