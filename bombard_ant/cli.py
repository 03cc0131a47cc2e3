"""
CLI module for the bombing GA.

Loads the run configuration, drives the evolution loop with optional
pacing, reports progress and writes the run outputs.
"""

import time
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np

from .config_loader import (
    get_output_config,
    get_pacing_config,
    load_config,
    print_config_summary,
    run_config_from_dict,
)
from .evolution import EvolutionLoop
from .io_utils import save_best_candidate_csv, save_history_csv, save_run_summary


def make_progress_reporter(max_generations: int, delay_seconds: float = 0.0, every: int = 10):
    """
    Build the per-generation callback used by run_evolution.

    Prints a progress line every ``every`` generations and on the final one,
    then sleeps ``delay_seconds`` to pace the run.
    """
    def report(loop: EvolutionLoop) -> None:
        if loop.generation % every == 0 or loop.generation == max_generations:
            print(f"  Progress: {loop.generation}/{max_generations} generations  "
                  f"best={loop.best_fitness:.1f}  kill rate={loop.kill_rate:.1f}%")
        if delay_seconds > 0:
            time.sleep(delay_seconds)

    return report


def run_evolution(
    config: Dict[str, Any],
    rng: Optional[np.random.Generator] = None,
    delay_seconds: Optional[float] = None
) -> EvolutionLoop:
    """
    Reset and run an evolution loop for a configuration dictionary.

    Args:
        config: Configuration dictionary (as loaded from YAML)
        rng: Optional random number generator
        delay_seconds: Pause between generations (defaults to pacing config)

    Returns:
        The finished EvolutionLoop
    """
    run_config = run_config_from_dict(config)
    if delay_seconds is None:
        delay_seconds = float(get_pacing_config(config)["delay_seconds"])

    loop = EvolutionLoop(run_config, rng=rng)
    loop.reset()

    print(f"Active nests: {len(loop.nests)}  total ants: {loop.total_ants}")
    print(f"Initial best: {loop.best_fitness:.1f} kills")
    print(f"Evolving {run_config.max_generations} generations...")
    print()

    loop.run(on_generation=make_progress_reporter(run_config.max_generations, delay_seconds))
    return loop


def build_run_summary(loop: EvolutionLoop) -> Dict[str, Any]:
    cfg = loop.config
    return {
        "generation": loop.generation,
        "best_fitness": float(loop.best_fitness),
        "total_ants": int(loop.total_ants),
        "kill_rate": float(loop.kill_rate),
        "best_bombs": [[float(x), float(y)] for x, y in loop.best_bombs],
        "config": {
            "population_size": cfg.population_size,
            "bombs_per_candidate": cfg.bombs_per_candidate,
            "blast_radius": cfg.blast_radius,
            "crossover_rate": cfg.crossover_rate,
            "mutation_rate": cfg.mutation_rate,
            "max_generations": cfg.max_generations,
            "nest_count": len(loop.nests),
            "grid": [cfg.grid.width, cfg.grid.height],
        },
    }


def prepare_output_root(output_config: Dict[str, Any]) -> Path:
    """
    Create the output directory before any work is done.

    Raises:
        FileExistsError: If the output directory exists and overwrite is off
    """
    output_root = Path(output_config["root"])
    overwrite = output_config.get("overwrite", False)

    if output_root.exists() and not overwrite:
        raise FileExistsError(
            f"Output directory already exists: {output_root}\n"
            f"Set 'output.overwrite: true' in config to overwrite"
        )
    output_root.mkdir(parents=True, exist_ok=overwrite)
    return output_root


def export_results(loop: EvolutionLoop, output_config: Dict[str, Any]) -> Dict[str, Path]:
    """
    Write history, best candidate, summary and (optionally) plots.

    Raises:
        FileExistsError: If an output file exists and overwrite is off
    """
    output_root = Path(output_config["root"])
    overwrite = output_config.get("overwrite", False)
    output_root.mkdir(parents=True, exist_ok=True)

    paths = {
        "history": save_history_csv(loop.history, output_root / "history.csv", overwrite=overwrite),
        "best": save_best_candidate_csv(loop.best_candidate, output_root / "best_candidate.csv",
                                        overwrite=overwrite),
        "summary": save_run_summary(build_run_summary(loop), output_root / "summary.yaml",
                                    overwrite=overwrite),
    }

    if output_config.get("save_plots", True):
        # Non-interactive backend; no display needed
        import matplotlib
        matplotlib.use('Agg')
        from .visualization import SolutionVisualizer

        visualizer = SolutionVisualizer(loop.config.grid, loop.nests, loop.config.blast_radius)
        plot_path = output_root / "best_solution.png"
        visualizer.plot_run_overview(loop.best_bombs, loop.history, save_path=str(plot_path))
        paths["plot"] = plot_path

    return paths


def run_from_config(config_path: str, delay_seconds: Optional[float] = None) -> EvolutionLoop:
    """
    Load configuration, run the evolution and export results.

    This is the main entry point called by bombard_cli.py.

    Raises:
        ConfigurationError: If config is missing or invalid
        FileExistsError: If outputs exist and overwrite is off
    """
    print(f"Loading configuration from: {config_path}")
    config = load_config(config_path)
    print_config_summary(config, config_path)

    # Fail on bad parameters before touching the output directory
    run_config_from_dict(config)
    output_config = get_output_config(config)
    output_root = prepare_output_root(output_config)
    print(f"Output directory: {output_root}")

    print("=" * 70)
    print("EVOLUTION")
    print("=" * 70)
    start_time = time.time()
    loop = run_evolution(config, delay_seconds=delay_seconds)
    elapsed_time = time.time() - start_time

    paths = export_results(loop, output_config)

    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Generations: {loop.generation}")
    print(f"Best fitness: {loop.best_fitness:.1f} / {loop.total_ants} ants ({loop.kill_rate:.1f}%)")
    print(f"Elapsed: {elapsed_time:.2f} seconds")
    for name, path in paths.items():
        print(f"  {name}: {path}")

    return loop
