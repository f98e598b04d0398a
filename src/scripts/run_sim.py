#!/usr/bin/env python3
"""
Headless Life Runner

Steps a simulation for a fixed number of generations, printing live-cell
counts, and optionally saves a point-cloud image of the final lattice.
"""

import argparse
import sys
import time

from life_sim import GameOptions, ManualScheduler, SimulationHandle, utils


def build_options(args) -> GameOptions:
    params = utils.load_params(args.config) if args.config else {}
    overrides = {
        "x_cells": args.x,
        "y_cells": args.y,
        "z_cells": args.z,
        "density": args.density,
    }
    params.update({k: v for k, v in overrides.items() if v is not None})
    return GameOptions.from_mapping(params).validate()


def main():
    parser = argparse.ArgumentParser(description="Run a headless Life simulation")
    parser.add_argument("--x", type=int, default=None, help="cells along x (default: 75)")
    parser.add_argument("--y", type=int, default=None, help="cells along y (default: 75)")
    parser.add_argument("--z", type=int, default=None, help="cells along z; 1 for 2D (default: 75)")
    parser.add_argument("--density", type=float, default=None, help="initial live probability (default: 0.15)")
    parser.add_argument("--generations", type=int, default=100, help="number of generations")
    parser.add_argument("--every", type=int, default=10, help="report interval in generations")
    parser.add_argument("--config", default=None, help="JSON/TOML file with game options")
    parser.add_argument("--seed", type=int, default=42, help="random seed")
    parser.add_argument("--out", default=None, help="optional PNG of the final lattice")
    args = parser.parse_args()

    utils.set_seed(args.seed)
    options = build_options(args)

    scheduler = ManualScheduler()
    sim = SimulationHandle(scheduler, verbose=True)
    sim.start(options)

    start_time = time.time()
    for _ in range(args.generations):
        scheduler.advance()
        if args.every and sim.generation % args.every == 0:
            snap = sim.snapshot()
            print(f"gen {snap.generation:5d}: live={snap.live} ({snap.density:.4f})")
    elapsed_time = time.time() - start_time

    if args.out:
        from life_sim.render import MatplotlibRenderer

        renderer = MatplotlibRenderer(
            size=options.size, width=options.width, height=options.height, spin=False, interactive=False
        )
        renderer(sim.current.view())
        renderer.save(args.out)
        renderer.close()
        print(f"Final lattice saved to {args.out}")

    final = sim.snapshot()
    sim.stop()

    print(f"\nSimulation completed: {final.generation} generations in {elapsed_time:.2f} s")
    print(f"   Final live cells: {final.live}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
