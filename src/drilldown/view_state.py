"""
View state – the national/regional toggle, its clickable hitbox and hit testing.

The hitbox is a fixed approximate rectangle over the drill-down region on the
national map image. It is derived from the frame size only, never from the
image itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from drilldown.config import FRAME_MARGIN, HITBOX_PROPORTIONS
from drilldown.utils.exceptions import ConfigError
from drilldown.utils.logger_config import setup_logger

logger = setup_logger(__name__)


class View(str, Enum):
    NATIONAL = 'national'
    REGIONAL = 'regional'


@dataclass(frozen=True)
class Hitbox:
    x: float
    y: float
    w: float
    h: float

    @classmethod
    def from_frame(
        cls,
        width: float,
        height: float,
        proportions: Tuple[float, float, float, float] = HITBOX_PROPORTIONS,
        margin_ratio: float = FRAME_MARGIN,
    ) -> 'Hitbox':
        """
        Place the hitbox inside a frame of the given size.

        A margin of ``margin_ratio * width`` is kept on every side and the
        proportions are fractions of the remaining inner map area.

        Raises:
            ConfigError: frame size is not positive or the box would fall
                outside the inner map.
        """
        if width <= 0 or height <= 0:
            raise ConfigError(f'Frame must have a positive size, got {width}x{height}')
        px, py, pw, ph = proportions
        if min(proportions) < 0 or px + pw > 1 or py + ph > 1:
            raise ConfigError(f'Hitbox proportions {proportions} fall outside the map')

        margin = width * margin_ratio
        map_w = width - margin * 2
        map_h = height - margin * 2
        if map_w <= 0 or map_h <= 0:
            raise ConfigError(f'Margin {margin_ratio} leaves no map area in {width}x{height}')
        return cls(
            x=margin + map_w * px,
            y=margin + map_h * py,
            w=map_w * pw,
            h=map_h * ph,
        )


def contains(px: float, py: float, box: Hitbox) -> bool:
    """Inclusive point-in-rectangle test; points on the border count as inside."""
    return box.x <= px <= box.x + box.w and box.y <= py <= box.y + box.h


class ViewStateMachine:
    """
    Two-state toggle between the national and regional views.

    From the national view only a click inside the hitbox drills down; from
    the regional view any click returns to the national view.
    """

    def __init__(self, initial: View = View.NATIONAL) -> None:
        self.view = initial

    def pointer_down(self, px: float, py: float, box: Hitbox) -> Optional[View]:
        """
        Evaluate a click.

        Returns:
            The new view when the click caused a transition, None for a no-op.
        """
        if self.view is View.NATIONAL:
            if not contains(px, py, box):
                return None
            self.view = View.REGIONAL
        else:
            self.view = View.NATIONAL
        logger.info(f'View changed to {self.view.value} (click at {px:.0f}, {py:.0f})')
        return self.view
