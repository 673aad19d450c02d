#!/usr/bin/env python
"""
NVE (constant energy) simulation of an argon crystal.

This example demonstrates:
- A microcanonical run with the drift-kick-drift integrator
- Energy exchange between kinetic and potential terms
- Energy conservation and pair-list rebuilds

Usage:
    python examples/run_nve.py
"""

from argonmd import ArgonEngine, SimulationConfig, plotting, simulate
from argonmd.engines import StateReporter


def main():
    print("=" * 60)
    print("NVE Argon Crystal")
    print("=" * 60)

    config = SimulationConfig(
        supercell_count=5, ensemble="nve", temperature=80.0, seed=7
    )

    # Short run with a live state table
    engine = ArgonEngine(config)
    engine.add_reporter(StateReporter(frequency=100))
    engine.run(500)
    print(f"\nPair search: {engine.neighbor_strategy}, rebuilds: {engine.rebuild_count}")

    # Same setup through the high-level API, for plotting
    result = simulate.run(2000, config, report_every=10)

    print("\nSummary:")
    print(f"  Atoms: {result.n_atoms}")
    print(f"  Box length: {result.box_length:.3f} nm")
    print(f"  Mean temperature: {result.mean_temperature:.2f} K")
    print(f"  Relative energy drift: {result.energy_drift:.2e}")
    print(f"  Energy conserved: {abs(result.energy_drift) < 1e-3}")

    if plotting.HAS_MATPLOTLIB:
        plotting.energy(result, show=False)
        plotting.save("nve_energy.png")
        print("\nPlot saved to nve_energy.png")


if __name__ == "__main__":
    main()
