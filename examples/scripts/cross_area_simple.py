"""
Cross-Section Simulation - Simple Example

Measures the tumbling-averaged projected area of small test structures and
compares against closed-form values.

This example validates:
    - Orientation sampling and projection
    - Lookup-grid collision testing
    - Monte Carlo area estimate and its ESE

Expected results:
    - Single sphere of radius r with probe radius g: π (r + g)²
    - Dumbbell: per-orientation area between one and two discs
"""

import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path
import sys

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from crossarea_mc import AtomSet, CrossAreaEngine, SimulationConfig, RunLog


def simulate_sphere(radius: float, probe_radius: float, n_theta_steps: int = 6,
                    max_guesses: int = 20000, seed: int = 0):
    """
    Cross section of a single atom; the exact answer is π (r + g)².

    Parameters:
        radius: Atomic radius [Å]
        probe_radius: Probe particle radius [Å]
        n_theta_steps: Polar angle steps
        max_guesses: Guess cap per orientation
        seed: Random seed

    Returns:
        SimulationResult, exact area [Å²]
    """
    atoms = AtomSet.centered([[0.0, 0.0, 0.0]], [radius])
    config = SimulationConfig(n_theta_steps=n_theta_steps, probe_radius=probe_radius,
                              seed=seed, max_guesses=max_guesses)

    result = CrossAreaEngine(config).run(atoms, log=RunLog.silent())
    exact = np.pi * (radius + probe_radius) ** 2

    error_pct = 100 * abs(result.mean_area - exact) / exact
    status = "✓ PASS" if error_pct < 1.0 else "✗ FAIL"
    print(f"{status} r = {radius:4.2f} Å, g = {probe_radius:4.2f} Å: "
          f"Expected {exact:7.2f} Å², Got {result.mean_area:7.2f} ± {result.ese:.2f} Å² "
          f"({error_pct:4.2f}%)")

    return result, exact


def simulate_dumbbell(separation: float = 6.0, radius: float = 2.0,
                      n_theta_steps: int = 12, seed: int = 0):
    """
    Two equal atoms on the y axis, so the projection changes with theta.

    Parameters:
        separation: Centre-to-centre distance [Å]
        radius: Atomic radius [Å]
        n_theta_steps: Polar angle steps
        seed: Random seed

    Returns:
        SimulationResult
    """
    print(f"\n{'='*70}")
    print(f"Dumbbell Simulation")
    print(f"{'='*70}")
    print(f"  Separation: {separation} Å")
    print(f"  Radius: {radius} Å")
    print(f"  Theta steps: {n_theta_steps}")
    print(f"{'='*70}\n")

    half = separation / 2
    atoms = AtomSet.centered([[0.0, -half, 0.0], [0.0, half, 0.0]], [radius, radius])
    config = SimulationConfig(n_theta_steps=n_theta_steps, probe_radius=0.0,
                              seed=seed, max_guesses=20000)

    result = CrossAreaEngine(config).run(atoms, log=RunLog.silent(), progress=True)

    print(f"\n  Mean area: {result.mean_area:.2f} Å²")
    print(f"  Total ESE: {result.ese:.3g} Å²")
    print(f"  Orientations: {result.n_orientations}")
    print(f"  Range: {result.areas.min():.2f} - {result.areas.max():.2f} Å²\n")

    return result


def plot_orientation_areas(result, radius, save_path=None):
    """
    Scatter of per-orientation area against theta, coloured by phi.

    Parameters:
        result: SimulationResult
        radius: Atomic radius, for the one-disc and two-disc reference lines
        save_path: Path to save figure (optional)
    """
    plt.figure(figsize=(10, 6))

    sc = plt.scatter(result.column('theta'), result.areas, c=result.column('phi'),
                     cmap='viridis', s=30)
    plt.colorbar(sc, label='φ [rad]')

    one_disc = np.pi * radius ** 2
    plt.axhline(one_disc, color='r', linestyle='--', linewidth=1.5,
                alpha=0.7, label=f'One disc: {one_disc:.1f} Å²')
    plt.axhline(2 * one_disc, color='g', linestyle=':', linewidth=1.5,
                alpha=0.7, label=f'Two discs: {2 * one_disc:.1f} Å²')
    plt.axhline(result.mean_area, color='k', linewidth=1.0,
                label=f'Mean: {result.mean_area:.1f} Å²')

    plt.xlabel('θ [rad]', fontsize=14, fontweight='bold')
    plt.ylabel('Projected area [Å²]', fontsize=14, fontweight='bold')
    plt.title('Dumbbell: area per orientation', fontsize=16, fontweight='bold')

    plt.grid(True, alpha=0.3, linestyle='--')
    plt.legend(fontsize=12, loc='lower right')
    plt.xlim(0, np.pi * 1.02)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"Figure saved: {save_path}")

    return plt.gcf()


# ============================================================================
# Main Execution
# ============================================================================

if __name__ == "__main__":
    # Example 1: Sphere validation
    print("\n" + "="*70)
    print("Example 1: Single Sphere vs π (r + g)²")
    print("="*70 + "\n")

    for radius, probe_radius in [(1.0, 0.0), (1.7, 1.0), (2.5, 0.5)]:
        simulate_sphere(radius, probe_radius)

    # Example 2: Dumbbell
    print("\n" + "="*70)
    print("Example 2: Orientation Dependence")
    print("="*70)

    dumbbell = simulate_dumbbell(separation=6.0, radius=2.0)
    fig = plot_orientation_areas(dumbbell, 2.0, save_path='dumbbell_areas.png')
    plt.show()

    print("\n" + "="*70)
    print("All examples complete!")
    print("="*70 + "\n")
