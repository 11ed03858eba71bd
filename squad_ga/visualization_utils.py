"""
Visualization utilities for the squad GA.

Plots the per-generation fitness history of a run.
"""

from pathlib import Path
from typing import Dict, List, Tuple, Union

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt


def plot_fitness_history(
    history: List[Dict[str, float]],
    output_path: Union[str, Path],
    figsize: Tuple[int, int] = (10, 6),
    title: str = "Squad GA fitness"
) -> Path:
    """
    Plot best and mean fitness per generation and save the figure.

    Args:
        history: Records with 'generation', 'best_fitness' and 'mean_fitness'
        output_path: Where to save the image
        figsize: Figure size (width, height)
        title: Plot title

    Returns:
        Path to saved image

    Raises:
        ValueError: If history is empty
    """
    if not history:
        raise ValueError("Cannot plot an empty fitness history")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    generations = [record['generation'] for record in history]
    best = [record['best_fitness'] for record in history]
    mean = [record['mean_fitness'] for record in history]

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(generations, best, color="red", label="Best (top of breeding pool)")
    ax.plot(generations, mean, color="blue", alpha=0.6, label="Population mean")
    ax.set_xlabel("Generation")
    ax.set_ylabel("Fitness")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend()

    fig.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return output_path
