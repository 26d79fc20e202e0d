"""
Headless benchmark driver

Allocates the simulation buffers once, runs react -> velocity step -> density
step repeatedly and reports the average cost of each phase in nanoseconds per
grid cell, roughly once per report interval.
"""

import argparse
import time
from dataclasses import dataclass
from typing import Dict, List, Optional
from .config import SolverConfig
from .numerics.relaxation import ORDERINGS
from .physics import FluidState, StableFluidSolver
from .utils.initial_conditions import react_state
from .visualization.diagnostics import DiagnosticPlotter

USAGE = """Where
    N: Grid resolution
    dt: Time step
    diff: Diffusion coefficient
    visc: Viscosity coefficient
    force: Scales the impulse injected into a quiet velocity field
    source: Amount of density that will be deposited
    steps: Amount of steps to perform"""


@dataclass
class StepStats:
    """Accumulated wall time of each phase, in nanoseconds."""
    react_ns: float = 0.0
    velocity_ns: float = 0.0
    density_ns: float = 0.0

    def __iadd__(self, other: 'StepStats') -> 'StepStats':
        self.react_ns += other.react_ns
        self.velocity_ns += other.velocity_ns
        self.density_ns += other.density_ns
        return self

    @property
    def total_ns(self) -> float:
        return self.react_ns + self.velocity_ns + self.density_ns

    def per_cell(self, steps: int, n: int) -> Dict[str, float]:
        """Average cost per step and per interior cell."""
        cells = max(steps, 1) * n * n
        return {
            'total_ns_per_cell': self.total_ns / cells,
            'react_ns_per_cell': self.react_ns / cells,
            'velocity_ns_per_cell': self.velocity_ns / cells,
            'density_ns_per_cell': self.density_ns / cells,
        }


def step(solver: StableFluidSolver, state: FluidState) -> StepStats:
    """
    One timed tick

    Returns:
        Wall time of each phase
    """
    cfg = solver.config

    react_begin = time.perf_counter_ns()
    react_state(state, cfg.force, cfg.source)
    react_end = time.perf_counter_ns()

    solver.velocity_step(state)
    velocity_end = time.perf_counter_ns()

    solver.density_step(state)
    density_end = time.perf_counter_ns()

    state.time += cfg.dt
    return StepStats(react_end - react_begin,
                     velocity_end - react_end,
                     density_end - velocity_end)


def format_report(averages: Dict[str, float], count: int) -> str:
    return (f"Total Avg: {averages['total_ns_per_cell']:.2f} ns\n"
            f"React Avg: {averages['react_ns_per_cell']:.2f} ns\n"
            f"Velocity Avg: {averages['velocity_ns_per_cell']:.2f} ns\n"
            f"Density Avg: {averages['density_ns_per_cell']:.2f} ns\n"
            f"avgCounter: {count}")


def run(config: SolverConfig, report_interval: float = 1.0,
        diagnostics: Optional[DiagnosticPlotter] = None,
        verbose: bool = True) -> List[Dict[str, float]]:
    """
    Run the headless benchmark

    Args:
        config: Run parameters; ``config.steps`` ticks are performed
        report_interval: Seconds between printed averages
        diagnostics: Optional recorder updated after every tick
        verbose: Print the averages

    Returns:
        The per-cell averages of every completed report window, plus the
        trailing partial window if it holds any steps
    """
    solver = StableFluidSolver(config)
    state = solver.create_state()

    reports = []
    window = StepStats()
    count = 0
    window_begin = time.perf_counter()

    try:
        for _ in range(config.steps):
            stats = step(solver, state)
            window += stats
            count += 1

            if diagnostics is not None:
                diagnostics.update(state, stats.per_cell(1, config.n))

            if not solver.check_state(state):
                break

            if time.perf_counter() - window_begin > report_interval:
                averages = window.per_cell(count, config.n)
                reports.append(averages)
                if verbose:
                    print(format_report(averages, count))
                window = StepStats()
                count = 0
                window_begin = time.perf_counter()
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")

    if count:
        reports.append(window.per_cell(count, config.n))

    return reports


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='stable-navstokes-headless',
        description='Headless stable fluids benchmark',
        epilog=USAGE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('N', type=int, nargs='?')
    parser.add_argument('dt', type=float, nargs='?')
    parser.add_argument('diff', type=float, nargs='?')
    parser.add_argument('visc', type=float, nargs='?')
    parser.add_argument('force', type=float, nargs='?')
    parser.add_argument('source', type=float, nargs='?')
    parser.add_argument('steps', type=int, nargs='?')
    parser.add_argument('--iterations', type=int, default=None,
                        help='Relaxation sweeps per implicit solve')
    parser.add_argument('--ordering', choices=ORDERINGS, default=None,
                        help='Relaxation ordering')
    parser.add_argument('--report-interval', type=float, default=1.0,
                        help='Seconds between printed averages')
    parser.add_argument('--diagnostics', metavar='PATH', default=None,
                        help='Save the diagnostic history as JSON')
    return parser


def config_from_args(args: argparse.Namespace) -> SolverConfig:
    positional = [args.N, args.dt, args.diff, args.visc,
                  args.force, args.source, args.steps]

    extra = {}
    if args.iterations is not None:
        extra['iterations'] = args.iterations
    if args.ordering is not None:
        extra['ordering'] = args.ordering

    if all(value is None for value in positional):
        config = SolverConfig(**extra)
        print("Using defaults:")
        print(config.describe())
        return config

    return SolverConfig(n=args.N, dt=args.dt, diff=args.diff, visc=args.visc,
                        force=args.force, source=args.source, steps=args.steps,
                        **extra)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    given = [getattr(args, name) is not None
             for name in ('N', 'dt', 'diff', 'visc', 'force', 'source', 'steps')]
    if any(given) and not all(given):
        parser.error("expected either no positional arguments or all seven")

    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    diagnostics = DiagnosticPlotter() if args.diagnostics else None
    run(config, report_interval=args.report_interval, diagnostics=diagnostics)

    if diagnostics is not None:
        diagnostics.save_diagnostics(args.diagnostics)
        print(f"Diagnostics saved to {args.diagnostics}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
