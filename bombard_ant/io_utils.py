"""
I/O utilities for the bombing GA.

Writes generation history and best-candidate CSV files and YAML run
summaries. Populations themselves are never written.
"""

import csv
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .data_models import Chromosome, GenerationStats


HISTORY_FIELDS = ['generation', 'best_fitness', 'mean_fitness', 'population_best', 'kill_rate']


def _prepare_output(output_path: Union[str, Path], overwrite: bool) -> Path:
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Output file already exists: {output_path}")

    # Create parent directory if needed
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path


def save_history_csv(
    history: List[GenerationStats],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save per-generation statistics to CSV file.

    Args:
        history: Statistics in generation order
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved CSV file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = _prepare_output(output_path, overwrite)

    with open(output_path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=HISTORY_FIELDS)
        writer.writeheader()
        for stats in history:
            writer.writerow(stats.to_dict())

    return output_path


def save_best_candidate_csv(
    chromosome: Chromosome,
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save bomb positions of a chromosome to CSV file.

    CSV format:
        name,x,y
        bomb_000,24.31,66.02
        ...

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = _prepare_output(output_path, overwrite)

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['name', 'x', 'y'])
        for idx, (x, y) in enumerate(chromosome.positions()):
            writer.writerow([f"bomb_{idx:03d}", x, y])

    return output_path


def load_history_csv(csv_path: Union[str, Path]) -> List[GenerationStats]:
    """
    Load generation statistics written by save_history_csv.

    Raises:
        FileNotFoundError: If CSV file doesn't exist
        ValueError: If CSV format is invalid
    """
    csv_path = Path(csv_path)

    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    history = []
    with open(csv_path, 'r') as f:
        reader = csv.DictReader(f)

        if not all(col in (reader.fieldnames or []) for col in HISTORY_FIELDS):
            raise ValueError(f"Invalid CSV format in {csv_path}. Expected columns: {','.join(HISTORY_FIELDS)}")

        for row in reader:
            history.append(GenerationStats(
                generation=int(row['generation']),
                best_fitness=float(row['best_fitness']),
                mean_fitness=float(row['mean_fitness']),
                population_best=float(row['population_best']),
                kill_rate=float(row['kill_rate'])
            ))

    return history


def save_run_summary(
    summary: Dict[str, Any],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save run summary to YAML file.

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = _prepare_output(output_path, overwrite)

    with open(output_path, 'w') as f:
        yaml.dump(summary, f, default_flow_style=False, sort_keys=False)

    return output_path
