"""
Rich-based live dashboard for Solana cluster telemetry.

A background poller merges RPC results into a lock-guarded ``StateStore`` while
the foreground renderer redraws a snapshot of it a few times per second until
the user presses ``q``.
"""

from .dashboard import ClusterDashboard
from .lifecycle import SolanaDashboard, run_dashboard
from .models import AppState, ValidatorStat
from .poller import TelemetryPoller
from .state import StateStore
from .terminal import TerminalSession

__all__ = [
    "AppState",
    "ClusterDashboard",
    "SolanaDashboard",
    "StateStore",
    "TelemetryPoller",
    "TerminalSession",
    "ValidatorStat",
    "run_dashboard",
]
