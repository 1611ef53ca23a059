"""
Console rendering of a sketch.

Presentation only: reads the sketch's public estimate and register
accessors and never changes its state.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table

from distinctsketch.sketches import HyperLogLogSketch


def summary_table(sketch: HyperLogLogSketch) -> Table:
    """Key figures of a sketch as a two-column table."""
    estimate = sketch.estimate()

    table = Table(title=f"📊 {sketch.name or 'HyperLogLog sketch'}")
    table.add_column("Property", style="cyan")
    table.add_column("Value", justify="right", style="green")

    table.add_row("Precision", str(sketch.precision))
    table.add_row("Registers", f"{sketch.register_count:,}")
    table.add_row("Empty registers", f"{sketch.zero_register_count():,}")
    table.add_row("Estimate", f"{estimate.value:,.1f}")
    table.add_row("Estimator", estimate.kind.value)
    table.add_row("Typical error", f"{sketch.typical_error_rate:.2%}")
    table.add_row("Memory", f"{sketch.memory_bytes():,} B")
    return table


def histogram_table(sketch: HyperLogLogSketch, bar_width: int = 40) -> Table:
    """Register value distribution with a proportional bar per value."""
    histogram = sketch.register_histogram()
    largest = max(histogram.values())

    table = Table(title="Register values")
    table.add_column("Value", justify="right", style="cyan")
    table.add_column("Registers", justify="right", style="green")
    table.add_column("", style="yellow")

    for value, n in histogram.items():
        bar = "█" * max(1, round(bar_width * n / largest))
        table.add_row(str(value), f"{n:,}", bar)
    return table


def render_sketch(
    sketch: HyperLogLogSketch,
    console: Optional[Console] = None,
) -> Console:
    """
    Print the summary and histogram tables for a sketch.

    Args:
        sketch: Sketch to display
        console: Console to print to (default: a new stdout console)

    Returns:
        The console used
    """
    if console is None:
        console = Console()
    console.print(summary_table(sketch))
    console.print(histogram_table(sketch))
    return console
