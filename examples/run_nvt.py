#!/usr/bin/env python
"""
NVT (constant temperature) argon simulation.

This example demonstrates:
- Temperature control via the Langevin thermostat
- Switching to Woodcock velocity scaling between steps
- Heating the crystal by raising the target temperature

Usage:
    python examples/run_nvt.py
"""

import numpy as np

from argonmd import ArgonEngine, SimulationConfig, plotting
from argonmd.engines import EnergyReporter


def main():
    print("=" * 60)
    print("NVT Argon (Langevin, then Woodcock)")
    print("=" * 60)

    engine = ArgonEngine(
        SimulationConfig(supercell_count=4, temperature=40.0, dt=1e-3, seed=3)
    )
    energies = EnergyReporter(frequency=10)
    engine.add_reporter(energies)

    print("\nLangevin bath at 40 K...")
    engine.run(2000)
    langevin_t = energies.temperature[-100:]

    print("Woodcock scaling, heating to 100 K...")
    engine.set_temperature_control("woodcock")
    engine.set_temperature_target(100.0)
    engine.run(2000)
    woodcock_t = energies.temperature[-100:]

    print("\nSummary:")
    print(f"  Langevin <T>: {np.mean(langevin_t):.2f} K (target 40 K)")
    print(f"  Woodcock <T>: {np.mean(woodcock_t):.2f} K (target 100 K)")
    print(f"  Final pressure: {engine.pressure_atm:.1f} atm")

    if plotting.HAS_MATPLOTLIB:
        import matplotlib.pyplot as plt

        fig, ax = plt.subplots(figsize=(10, 4))
        ax.plot(energies.times, energies.temperature, "b-", lw=0.8)
        ax.set_xlabel("Time (ps)")
        ax.set_ylabel("Temperature (K)")
        ax.set_title("Temperature vs Time")
        ax.grid(True, alpha=0.3)
        plotting.save("nvt_temperature.png")
        print("\nPlot saved to nvt_temperature.png")


if __name__ == "__main__":
    main()
