"""Side panel projection: what the dashboard shows for a view and its stats."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from drilldown.config import BREAKDOWN_LABEL, BREAKDOWN_ROWS, SHARE_LABEL, VIEW_COPY
from drilldown.region_stats import OffenseRow, RegionStats
from drilldown.view_state import View


@dataclass(frozen=True)
class DashboardContent:
    breadcrumb_text: str
    status_text: str
    snapshot_label: str
    breakdown_label: str = ''
    total_offenses: Optional[float] = None
    share_of_parent: Optional[float] = None
    share_label: str = SHARE_LABEL
    breakdown_rows: Tuple[OffenseRow, ...] = ()


def share_of_parent(
    stats_national: Optional[RegionStats],
    stats_regional: Optional[RegionStats],
) -> Optional[float]:
    """Regional total as a percentage of the national total, 2 dp. None when not computable."""
    if stats_national is None or stats_regional is None:
        return None
    if stats_national.total == 0:
        return None
    return round(stats_regional.total / stats_national.total * 100, 2)


def project(
    view: View,
    stats_national: Optional[RegionStats],
    stats_regional: Optional[RegionStats],
) -> DashboardContent:
    """
    Compute the side panel content for *view*.

    The national view reads the national stats and the regional view reads the
    regional stats. The text fields are always filled in; totals and rows are
    left empty when the stats for the view did not load.
    """
    copy = VIEW_COPY[view.value]
    source = stats_national if view is View.NATIONAL else stats_regional
    if source is None:
        return DashboardContent(
            breadcrumb_text=copy['breadcrumb'],
            status_text=copy['status'],
            snapshot_label=copy['snapshot'],
        )
    return DashboardContent(
        breadcrumb_text=copy['breadcrumb'],
        status_text=copy['status'],
        snapshot_label=copy['snapshot'],
        breakdown_label=BREAKDOWN_LABEL,
        total_offenses=source.total,
        share_of_parent=share_of_parent(stats_national, stats_regional),
        # TODO: confirm with product whether this should rank by count rather than keep file order
        breakdown_rows=source.head(BREAKDOWN_ROWS),
    )
