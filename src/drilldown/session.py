"""
Drill-down session – the context object handed to the app's event handlers.

Owns everything that changes while the console is open: the current view, the
hitbox for the current frame size, the projected side panel, the news gate and
any headline request still in flight. All mutation happens on the caller's
thread; a worker executor only ever produces a NewsResult value.
"""

from __future__ import annotations

from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from drilldown.dashboard import DashboardContent, project
from drilldown.news import ERROR_STATUS, FETCHING_STATUS, Headline, NewsGate, NewsResult
from drilldown.region_stats import RegionStats
from drilldown.utils.logger_config import setup_logger
from drilldown.view_state import Hitbox, View, ViewStateMachine, contains

logger = setup_logger(__name__)

NewsSource = Callable[[View], NewsResult]


@dataclass(frozen=True)
class NewsPanel:
    status: str = ''
    headlines: Tuple[Headline, ...] = ()


@dataclass
class PendingFetch:
    view: View
    ticket: int
    future: Future


class DrilldownSession:
    """
    Event handling for the drill-down console.

    Args:
        stats_national: Parent region stats, or None if the table didn't load.
        stats_regional: Sub-region stats, or None if the table didn't load.
        frame_size: (width, height) of the map frame in pointer coordinates.
        news_source: Callable returning headlines for a view, usually GNewsClient.fetch.
        executor: Runs news_source off the event thread. Without one the fetch
            runs inline and is applied immediately.
    """

    def __init__(
        self,
        stats_national: Optional[RegionStats],
        stats_regional: Optional[RegionStats],
        frame_size: Tuple[float, float],
        news_source: NewsSource,
        executor: Optional[Executor] = None,
    ) -> None:
        self.stats_national = stats_national
        self.stats_regional = stats_regional
        self.news_source = news_source
        self.executor = executor
        self.machine = ViewStateMachine()
        self.gate = NewsGate()
        self.frame_size = frame_size
        self.hitbox = Hitbox.from_frame(*frame_size)
        self.content: DashboardContent = project(self.view, stats_national, stats_regional)
        self.news = NewsPanel()
        self.pending: list[PendingFetch] = []
        self._ticket = 0

    @property
    def view(self) -> View:
        return self.machine.view

    # === Events ===

    def start(self) -> None:
        """Initial side panel and headlines for the starting view."""
        self._refresh(self.view)

    def resize(self, width: float, height: float) -> None:
        if (width, height) == self.frame_size:
            return
        self.frame_size = (width, height)
        self.hitbox = Hitbox.from_frame(width, height)
        logger.debug(f'Frame resized to {width}x{height}, hitbox now {self.hitbox}')

    def pointer_down(self, px: float, py: float) -> bool:
        """Handle a click. Returns True when the view changed."""
        new_view = self.machine.pointer_down(px, py, self.hitbox)
        if new_view is None:
            return False
        self._refresh(new_view)
        return True

    def is_hovering(self, px: float, py: float) -> bool:
        return self.view is View.NATIONAL and contains(px, py, self.hitbox)

    # === Transition side effects ===

    def _refresh(self, view: View) -> None:
        # projection first so the panel is current before any request goes out
        self.content = project(view, self.stats_national, self.stats_regional)
        self._maybe_fetch_news(view)

    def _maybe_fetch_news(self, view: View) -> None:
        if not self.gate.should_fetch(view):
            logger.debug(f'Headlines for {view.value} already requested, skipping')
            return
        self.gate.mark_fetched(view)
        self._ticket += 1
        self.news = NewsPanel(status=FETCHING_STATUS)

        if self.executor is None:
            self._apply(view, self._ticket, self.news_source(view))
            return
        future = self.executor.submit(self.news_source, view)
        self.pending.append(PendingFetch(view=view, ticket=self._ticket, future=future))

    def poll_news(self) -> bool:
        """
        Apply finished headline requests.

        Returns True while requests are still in flight.
        """
        still_pending = []
        for fetch in self.pending:
            if not fetch.future.done():
                still_pending.append(fetch)
                continue
            try:
                result = fetch.future.result()
            except Exception as e:
                logger.error(f'Headline worker for {fetch.view.value} crashed: {str(e)}')
                result = NewsResult(view=fetch.view, status=ERROR_STATUS)
            self._apply(fetch.view, fetch.ticket, result)
        self.pending = still_pending
        return bool(self.pending)

    def _apply(self, view: View, ticket: int, result: NewsResult) -> None:
        if ticket != self._ticket or view is not self.view:
            logger.debug(f'Dropping stale headlines for {view.value} (ticket {ticket})')
            return
        self.news = NewsPanel(status=result.status, headlines=result.headlines)
