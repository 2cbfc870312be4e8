"""
Console front end: one measurement cycle plus a week view.

Run with: stress-monitor (or python -m stress_monitor.cli)
"""

import asyncio

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from stress_monitor.config import get_config, print_config_summary, validate_config
from stress_monitor.domain.models import StressCategory, TrendPoint, WindowSelection
from stress_monitor.services.date_window import weekday_labels
from stress_monitor.services.monitoring import SimulatedHRVSource, StressMonitorService
from stress_monitor.services.presentation import (
    CATEGORY_COLORS,
    point_label,
    status_message,
)
from stress_monitor.services.telemetry import configure_logging


def render_week(selection: WindowSelection, points: list[TrendPoint | None]) -> Table:
    """Weekday header row with the selected day highlighted, then values and categories."""
    table = Table(title="HRV Trend (7 days)", show_lines=True)
    table.add_column("")
    for day, label in zip(selection.days, weekday_labels(selection.days), strict=True):
        header = f"{label}\n{day.day:02d}"
        style = "bold reverse" if selection.is_selected(day) else None
        table.add_column(header, justify="center", header_style=style)

    values: list[str] = []
    categories: list[str] = []
    for point in points:
        if point is None:
            values.append("-")
            categories.append(f"[dim]{point_label(point)}[/dim]")
        else:
            color = CATEGORY_COLORS[point.category]
            values.append(f"{point.value_ms:.0f}")
            categories.append(f"[{color}]{point_label(point)}[/{color}]")

    table.add_row("HRV (ms)", *values)
    table.add_row("Status", *categories)
    return table


def render_gauge(value_ms: float | None, fraction: float, category: StressCategory | None) -> Panel:
    """Text gauge: a 20-cell bar filled to fraction, the value and the status line."""
    filled = round(fraction * 20)
    bar = "█" * filled + "░" * (20 - filled)
    value_text = "--" if value_ms is None else f"{int(value_ms)}"
    status = status_message(category) if category is not None else "HRV Status: No data"
    color = CATEGORY_COLORS[category] if category is not None else "grey50"
    return Panel(f"[{color}]{bar}[/{color}]  {value_text} ms\n{status}", title="HRV")


async def main(console: Console | None = None) -> StressMonitorService:
    """Run a single measurement cycle against the simulated source and render it."""
    console = console or Console()
    config = get_config()
    configure_logging(config.logging)

    service = StressMonitorService(SimulatedHRVSource(), config=config)
    await service.run_cycle()

    points = service.trend()
    console.print(render_gauge(service.current_value_ms, service.gauge(), service.current_category))
    console.print(render_week(service.selector.selection, points))
    return service


def run() -> None:
    validate_config()
    print_config_summary()
    asyncio.run(main())


if __name__ == "__main__":
    run()
