#!/usr/bin/env python3
"""
Interactive Life viewer: a realtime frame loop feeding a matplotlib point cloud.
"""

import argparse
import sys

from life_sim import GameOptions, RealtimeScheduler, SimulationHandle, utils
from life_sim.render import MatplotlibRenderer


def main():
    parser = argparse.ArgumentParser(description="Animate a Life simulation")
    parser.add_argument("--x", type=int, default=75)
    parser.add_argument("--y", type=int, default=75)
    parser.add_argument("--z", type=int, default=75)
    parser.add_argument("--density", type=float, default=0.15)
    parser.add_argument("--size", type=float, default=3, help="marker size")
    parser.add_argument("--fps", type=float, default=30.0)
    parser.add_argument("--frames", type=int, default=None, help="stop after this many frames")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    if args.seed is not None:
        utils.set_seed(args.seed)

    options = GameOptions(
        size=args.size,
        x_cells=args.x,
        y_cells=args.y,
        z_cells=args.z,
        density=args.density,
    ).validate()

    renderer = MatplotlibRenderer(size=options.size, width=options.width, height=options.height)
    scheduler = RealtimeScheduler(fps=args.fps)
    sim = SimulationHandle(scheduler, renderer, verbose=True)

    sim.start(options)
    try:
        scheduler.run(max_frames=args.frames)
    except KeyboardInterrupt:
        pass
    finally:
        sim.stop()
        renderer.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
