import pytest
from concurrent.futures import Future
from pathlib import Path
import sys

# Add repo root and src to path for imports
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / 'src'))
sys.path.insert(0, str(ROOT))

from app import news_settled
from drilldown.news import NewsResult
from drilldown.session import DrilldownSession


class ManualExecutor:
    """Hands back futures that the test completes itself."""

    def __init__(self):
        self.futures = []

    def submit(self, fn, *args):
        future = Future()
        self.futures.append((future, fn, args))
        return future

    def finish_all(self):
        for future, fn, args in self.futures:
            if not future.done():
                future.set_result(fn(*args))


def quiet_news(view):
    return NewsResult(view=view, status='No recent headlines.')


@pytest.fixture
def executor():
    return ManualExecutor()


@pytest.fixture
def session(executor):
    session = DrilldownSession(None, None, (960, 600), quiet_news, executor=executor)
    session.start()
    return session


class TestNewsPolling:
    def test_not_settled_while_request_in_flight(self, session):
        assert session.pending
        assert news_settled(session) is False
        assert session.pending

    def test_settles_once_when_last_request_finishes(self, session, executor):
        executor.finish_all()
        assert news_settled(session) is True
        assert not session.pending
        assert session.news.status == 'No recent headlines.'
        # a later poll with nothing in flight must not ask for another rerun
        assert news_settled(session) is False

    def test_nothing_pending_never_settles(self):
        session = DrilldownSession(None, None, (960, 600), quiet_news)
        session.start()
        assert not session.pending
        assert news_settled(session) is False
