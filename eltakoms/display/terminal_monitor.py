"""
Terminal monitor for the multisensor snapshot.
Full-screen panel using the Rich library, refreshed from the snapshot file.
"""

import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from rich.align import Align
from rich.console import Console
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from eltakoms.emitter.snapshot import read_snapshot
from eltakoms.shared.models import Reading

logger = logging.getLogger(__name__)

# The sensor sends every second; older snapshots mean the collector is stuck
STALE_AFTER_SECONDS = 10


class TerminalMonitor:
    """Terminal display of the latest multisensor reading"""

    def __init__(
        self,
        snapshot_path: Union[str, Path],
        console: Optional[Console] = None,
        refresh_interval: float = 1.0,
    ):
        self.snapshot_path = Path(snapshot_path)
        self.console = console or Console()
        self.refresh_interval = refresh_interval

    def _snapshot_age(self) -> Optional[float]:
        try:
            return time.time() - self.snapshot_path.stat().st_mtime
        except OSError:
            return None

    def _create_header(self, age: Optional[float]) -> Panel:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        header_text = Text()
        header_text.append("ELTAKO MULTISENSOR", style="bold cyan")
        header_text.append(f" - {timestamp}", style="white")
        if age is None:
            header_text.append(" - NO DATA", style="red")
        elif age > STALE_AFTER_SECONDS:
            header_text.append(f" - STALE {int(age)}s", style="yellow")
        else:
            header_text.append(" - LIVE", style="green")
        return Panel(Align.center(header_text), style="cyan")

    def _create_reading_panel(self, reading: Reading) -> Panel:
        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("Measurement", style="white", width=14)
        table.add_column("Value", style="white", width=14)

        table.add_row("Temperature", f"{reading.temperature:+.1f} °C")
        table.add_row("Sun South", str(reading.sun_south))
        table.add_row("Sun West", str(reading.sun_west))
        table.add_row("Sun East", str(reading.sun_east))
        table.add_row("Dawn", str(reading.dawn))
        table.add_row("Wind", f"{reading.wind_speed:.1f} m/s")
        table.add_row(
            "Obscure",
            "pitch black" if reading.obscure else "no",
            style="yellow" if reading.obscure else None,
        )
        table.add_row(
            "Rain",
            "raining" if reading.raining else "dry",
            style="cyan" if reading.raining else None,
        )
        return Panel(table, title=reading.compact(), style="cyan")

    def render(self) -> Layout:
        """Build the full display from the current snapshot."""
        age = self._snapshot_age()
        reading = read_snapshot(self.snapshot_path) if age is not None else None

        if reading is None:
            body = Panel(
                Align.center(Text(f"Waiting for {self.snapshot_path}", style="bold yellow")),
                style="yellow",
            )
        else:
            body = self._create_reading_panel(reading)

        layout = Layout()
        layout.split_column(
            Layout(self._create_header(age), name="header", size=3),
            Layout(body, name="body"),
        )
        return layout

    def update_display(self) -> None:
        self.console.clear()
        self.console.print(self.render())

    def run(self) -> None:
        """Redraw until interrupted."""
        logger.info(f"Monitoring {self.snapshot_path}")
        while True:
            self.update_display()
            time.sleep(self.refresh_interval)
