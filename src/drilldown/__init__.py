"""Drill-down crime console: offense stats, view state, dashboard projection and news."""

from .dashboard import DashboardContent, project
from .news import GNewsClient, NewsGate, NewsResult
from .region_stats import OffenseRow, RegionStats, parse_frame, parse_stats
from .session import DrilldownSession
from .view_state import Hitbox, View, ViewStateMachine, contains

__all__ = [
    'DashboardContent',
    'DrilldownSession',
    'GNewsClient',
    'Hitbox',
    'NewsGate',
    'NewsResult',
    'OffenseRow',
    'RegionStats',
    'View',
    'ViewStateMachine',
    'contains',
    'parse_frame',
    'parse_stats',
    'project',
]
