"""
Crime headline feed for the side panel.

Headlines come from the GNews search API (https://gnews.io/docs/v4). Each
view has one fixed query string. Every failure mode ends up as a status
message for the panel; nothing here raises to the caller of ``fetch``.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

import requests

from drilldown.config import (
    GNEWS_API_KEY,
    GNEWS_URL,
    MAX_HEADLINES,
    NEWS_QUERIES,
    NEWS_TIMEOUT,
)
from drilldown.utils.exceptions import NewsFetchError
from drilldown.utils.logger_config import setup_logger
from drilldown.view_state import View

logger = setup_logger(__name__)

FETCHING_STATUS = 'Fetching crime news…'
EMPTY_STATUS = 'No headlines found (rate limit or empty result).'
ERROR_STATUS = 'Error fetching news (check logs / API key).'
NO_KEY_STATUS = 'News unavailable: GNEWS_API_KEY is not set.'


class NewsGate:
    """
    Coarse de-duplication of headline requests, keyed only on the view.

    Callers mark a view as fetched as soon as they decide to fetch, before the
    request resolves, so a second entry into the same view doesn't re-request.
    """

    def __init__(self) -> None:
        self.last_fetched_view: Optional[View] = None

    def should_fetch(self, view: View) -> bool:
        return view != self.last_fetched_view

    def mark_fetched(self, view: View) -> None:
        self.last_fetched_view = view

    def reset(self) -> None:
        self.last_fetched_view = None


@dataclass(frozen=True)
class Headline:
    title: str
    url: str
    published_at: Optional[datetime]
    source_name: str

    @property
    def meta(self) -> str:
        stamp = self.published_at.astimezone().strftime('%Y-%m-%d %H:%M') if self.published_at else 'Unknown date'
        return f'{stamp} · {self.source_name}'


@dataclass(frozen=True)
class NewsResult:
    view: View
    status: str
    headlines: Tuple[Headline, ...] = ()


def _parse_timestamp(raw: Optional[str]) -> Optional[datetime]:
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw.replace('Z', '+00:00'))
    except ValueError:
        return None


def parse_articles(payload: dict, limit: int = MAX_HEADLINES) -> Tuple[Headline, ...]:
    """Turn a GNews response body into at most *limit* headlines."""
    if not isinstance(payload, dict):
        return ()
    headlines = []
    for article in (payload.get('articles') or [])[:limit]:
        source = article.get('source') or {}
        headlines.append(Headline(
            title=article.get('title') or 'Untitled',
            url=article.get('url') or '',
            published_at=_parse_timestamp(article.get('publishedAt')),
            source_name=source.get('name') or 'Source',
        ))
    return tuple(headlines)


class GNewsClient:
    """
    Small client for the GNews search endpoint.

    Attributes:
        api_key (str): GNews API key; without one every fetch reports a status message
        url (str): Search endpoint
        timeout (float): Per-request timeout in seconds
        retries (int): Attempts per fetch, rate-limit responses back off between them
        rate_limit (float): Base wait in seconds used for the back-off

    Example:
        >>> client = GNewsClient(api_key='...')
        >>> client.fetch(View.NATIONAL).status
    """

    def __init__(
        self,
        api_key: Optional[str] = GNEWS_API_KEY,
        url: str = GNEWS_URL,
        timeout: float = NEWS_TIMEOUT,
        retries: int = 2,
        rate_limit: float = 1.0,
        max_articles: int = MAX_HEADLINES,
    ) -> None:
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.retries = retries
        self.rate_limit = rate_limit
        self.max_articles = max_articles

    def _params(self, view: View) -> dict:
        return {
            'q': NEWS_QUERIES[view.value],
            'lang': 'en',
            'country': 'us',
            'max': self.max_articles,
            'apikey': self.api_key,
        }

    def _make_request(self, view: View) -> dict:
        """
        GET the search endpoint for *view* with simple retry logic.

        Raises:
            NewsFetchError: network failure, non-200 response or a body that isn't JSON
        """
        params = self._params(view)
        last_error = 'no attempt made'
        for attempt in range(self.retries):
            try:
                logger.debug(f'Requesting headlines for {view.value}: q={params["q"]!r}')
                response = requests.get(self.url, params=params, timeout=self.timeout)
            except requests.exceptions.RequestException as e:
                raise NewsFetchError(f'Network error: {str(e)}') from e

            if response.status_code == 200:
                try:
                    return response.json()
                except ValueError as e:
                    raise NewsFetchError(f'Response was not JSON: {str(e)}') from e

            last_error = f'{response.status_code} {response.reason}'
            if response.status_code != 429:
                break
            wait_time = min((attempt + 1) * self.rate_limit * 2, 30)
            logger.warning(f'Rate Limit Exceeded, waiting for {wait_time}s')
            time.sleep(wait_time)

        raise NewsFetchError(f'Request failed: {last_error}')

    def fetch(self, view: View) -> NewsResult:
        """Fetch headlines for *view*; failures come back as a status message."""
        if not self.api_key:
            logger.warning('GNEWS_API_KEY not configured, skipping headline request')
            return NewsResult(view=view, status=NO_KEY_STATUS)
        try:
            payload = self._make_request(view)
        except NewsFetchError as e:
            logger.error(f'Headline fetch for {view.value} failed: {str(e)}')
            return NewsResult(view=view, status=ERROR_STATUS)

        headlines = parse_articles(payload, self.max_articles)
        if not headlines:
            return NewsResult(view=view, status=EMPTY_STATUS)
        logger.info(f'Fetched {len(headlines)} headlines for {view.value}')
        return NewsResult(
            view=view,
            status=f'Showing {len(headlines)} latest crime headlines',
            headlines=headlines,
        )
