"""
Diagnostic history and plots for stable fluids simulations
"""

import json
import numpy as np
import matplotlib.pyplot as plt
from typing import List, Dict, Optional
from ..physics import FluidState

TIMING_KEYS = ('react_ns_per_cell', 'velocity_ns_per_cell', 'density_ns_per_cell')


class DiagnosticPlotter:
    """
    Record and plot diagnostic quantities of a simulation
    """

    def __init__(self):
        """Initialize diagnostic plotter"""
        self.history: Dict[str, List[float]] = {
            'time': [],
            'energy': [],
            'total_density': [],
            'max_velocity': [],
            'max_divergence': [],
        }
        for key in TIMING_KEYS:
            self.history[key] = []

    def update(self, state: FluidState, timings: Optional[Dict[str, float]] = None):
        """
        Update diagnostic history with current state

        Args:
            state: Current fluid state
            timings: Optional per-cell phase timings of the last tick, keyed
                like TIMING_KEYS. Missing entries are recorded as NaN.
        """
        self.history['time'].append(state.time)
        self.history['energy'].append(state.kinetic_energy())
        self.history['total_density'].append(state.total_density())
        self.history['max_velocity'].append(state.max_speed())
        self.history['max_divergence'].append(state.max_divergence())

        timings = timings or {}
        for key in TIMING_KEYS:
            self.history[key].append(float(timings.get(key, np.nan)))

    def __len__(self):
        return len(self.history['time'])

    def plot_time_series(self) -> plt.Figure:
        """
        Plot time series of diagnostic quantities

        Returns:
            Figure object
        """
        fig, axes = plt.subplots(2, 2, figsize=(12, 8))
        axes = axes.flatten()

        t = np.array(self.history['time'])

        # Energy
        ax = axes[0]
        ax.plot(t, self.history['energy'], 'b-', linewidth=2)
        ax.set_xlabel('Time')
        ax.set_ylabel('Energy')
        ax.set_title('Kinetic Energy')
        ax.grid(True, alpha=0.3)

        # Density
        ax = axes[1]
        ax.plot(t, self.history['total_density'], 'r-', linewidth=2)
        ax.set_xlabel('Time')
        ax.set_ylabel('Total density')
        ax.set_title('Dye Mass')
        ax.grid(True, alpha=0.3)

        # Max velocity
        ax = axes[2]
        ax.plot(t, self.history['max_velocity'], 'g-', linewidth=2)
        ax.set_xlabel('Time')
        ax.set_ylabel('Max |u|')
        ax.set_title('Maximum Velocity')
        ax.grid(True, alpha=0.3)

        # Divergence
        ax = axes[3]
        divergence = np.array(self.history['max_divergence'])
        if np.any(divergence > 0):
            ax.semilogy(t, divergence + 1e-30, 'm-', linewidth=2)
        else:
            ax.plot(t, divergence, 'm-', linewidth=2)
        ax.set_xlabel('Time')
        ax.set_ylabel('Max |div u|')
        ax.set_title('Maximum Divergence')
        ax.grid(True, alpha=0.3)

        plt.tight_layout()
        return fig

    def plot_timings(self) -> plt.Figure:
        """
        Plot per-cell cost of each phase of the tick

        Returns:
            Figure object
        """
        fig, ax = plt.subplots(figsize=(10, 5))
        step = np.arange(len(self))

        for key, colour in zip(TIMING_KEYS, ('c', 'b', 'r')):
            label = key.replace('_ns_per_cell', '')
            ax.plot(step, self.history[key], color=colour, linewidth=2, label=label)

        ax.set_xlabel('Step')
        ax.set_ylabel('ns / cell')
        ax.set_title('Step Cost per Cell')
        ax.grid(True, alpha=0.3)
        ax.legend()

        plt.tight_layout()
        return fig

    def save_diagnostics(self, filename: str):
        """
        Save diagnostic data to file

        Args:
            filename: Output filename
        """
        # NaN is not valid JSON
        data = {}
        for key, values in self.history.items():
            data[key] = [None if np.isnan(v) else float(v) for v in values]

        with open(filename, 'w') as f:
            json.dump(data, f, indent=2)

    def load_diagnostics(self, filename: str):
        """
        Load diagnostic data from file

        Args:
            filename: Input filename
        """
        with open(filename, 'r') as f:
            data = json.load(f)

        self.history = {
            key: [np.nan if v is None else v for v in values]
            for key, values in data.items()
        }
