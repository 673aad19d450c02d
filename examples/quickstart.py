#!/usr/bin/env python
"""
Quick start example - the simplest way to run a simulation.

Usage:
    python examples/quickstart.py
"""

import logging

from argonmd import ArgonEngine, SimulationConfig, simulate


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    print("=" * 60)
    print("Argon MD Quick Start")
    print("=" * 60)

    # 1. One call: 256 atoms of solid argon at 50 K
    print("\n1. simulate.run:")
    print("-" * 40)
    result = simulate.run(500, SimulationConfig(supercell_count=4, seed=1), report_every=50)
    print(f"   Mean temperature: {result.mean_temperature:.2f} K")
    print(f"   Mean pressure:    {result.mean_pressure:.1f} atm")

    # 2. Drive the engine yourself and change the target on the fly
    print("\n2. Engine commands:")
    print("-" * 40)
    engine = ArgonEngine(
        SimulationConfig(supercell_count=4, temperature_control="woodcock", seed=2)
    )
    for target in (30.0, 60.0, 90.0):
        engine.set_temperature_target(target)
        engine.run(200)
        print(
            f"   target {target:5.1f} K -> T = {engine.temperature_kelvin:6.2f} K, "
            f"P = {engine.pressure_atm:9.1f} atm"
        )

    # 3. Two atoms at the bottom of the potential well
    print("\n3. Dimer at r = 2^(1/6) sigma:")
    print("-" * 40)
    result = simulate.dimer(n_steps=1000, report_every=100)
    print(f"   Energy drift: {result.energy_drift:.2e}")

    print("\n" + "=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
