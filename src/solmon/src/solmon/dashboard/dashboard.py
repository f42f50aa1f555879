"""Rich-based view of the cluster telemetry dashboard."""

from __future__ import annotations

from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from solmon import settings

from .chart import sparkline
from .models import AppState, success_percentage

TPS_HEIGHT = 3
SLOT_HEIGHT = 3
HISTORY_HEIGHT = 5


def format_success(assigned: int, produced: int) -> str:
    return f"{success_percentage(assigned, produced):.1f}%"


class ClusterDashboard:
    """Lays out an ``AppState`` snapshot as four stacked, titled panels."""

    def __init__(self, width: int = 80):
        self.width = width
        self.layout = Layout()
        self.setup_layout()

    def setup_layout(self):
        """Configure the dashboard layout structure."""
        self.layout.split(
            Layout(name="tps", size=TPS_HEIGHT),
            Layout(name="slot", size=SLOT_HEIGHT),
            Layout(name="history", size=HISTORY_HEIGHT),
            Layout(name="validators", ratio=1),
        )

    def generate_tps(self, snapshot: AppState):
        return Panel(Text(f"TPS: {snapshot.tps}"), title="TPS (Current)", title_align="left")

    def generate_slot(self, snapshot: AppState):
        return Panel(Text(f"Slot: {snapshot.slot}"), title="Slot", title_align="left")

    def generate_history(self, snapshot: AppState):
        """Generate the TPS trend sparkline."""
        # Borders and padding take four columns, borders two rows
        chart = sparkline(list(snapshot.tps_history), height=HISTORY_HEIGHT - 2, width=max(self.width - 4, 1))
        return Panel(
            Text(chart, style="green", no_wrap=True, overflow="crop"),
            title="TPS History",
            title_align="left",
        )

    def generate_validators(self, snapshot: AppState):
        """Generate the top validators table."""
        table = Table(
            show_header=True,
            header_style="yellow",
            box=None,
            expand=True,
            padding=(0, 1),
        )
        table.add_column("Validator", ratio=2, no_wrap=True, overflow="ellipsis")
        table.add_column("Assigned", ratio=1, no_wrap=True)
        table.add_column("Produced", ratio=1, no_wrap=True)
        table.add_column("Success %", ratio=1, no_wrap=True)

        for v in snapshot.validators:
            table.add_row(v.identity, str(v.assigned), str(v.produced), format_success(v.assigned, v.produced))

        return Panel(
            table,
            title="Top Validators",
            title_align="left",
            subtitle=f"press {settings.QUIT_KEY} to quit",
            subtitle_align="right",
        )

    def render(self, snapshot: AppState):
        """Render the complete dashboard layout for one frame."""
        self.layout["tps"].update(self.generate_tps(snapshot))
        self.layout["slot"].update(self.generate_slot(snapshot))
        self.layout["history"].update(self.generate_history(snapshot))
        self.layout["validators"].update(self.generate_validators(snapshot))
        return self.layout
