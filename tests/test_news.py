import pytest
from pathlib import Path
from unittest import mock
import sys

import requests

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from drilldown.news import (
    EMPTY_STATUS,
    ERROR_STATUS,
    NO_KEY_STATUS,
    GNewsClient,
    parse_articles,
)
from drilldown.view_state import View


def make_response(status_code=200, payload=None, reason='OK'):
    response = mock.Mock()
    response.status_code = status_code
    response.reason = reason
    response.json.return_value = payload if payload is not None else {}
    return response


def article(i, source=True):
    item = {
        'title': f'Headline {i}',
        'url': f'https://news.example.com/{i}',
        'publishedAt': '2024-05-01T12:30:00Z',
    }
    if source:
        item['source'] = {'name': 'Example Wire'}
    return item


@pytest.fixture
def client():
    return GNewsClient(api_key='test-key', url='https://gnews.test/search', rate_limit=0)


class TestParseArticles:
    def test_fields(self):
        headlines = parse_articles({'articles': [article(1)]})
        assert headlines[0].title == 'Headline 1'
        assert headlines[0].url == 'https://news.example.com/1'
        assert headlines[0].published_at.year == 2024
        assert headlines[0].source_name == 'Example Wire'

    def test_missing_source_and_date(self):
        item = article(2, source=False)
        item['publishedAt'] = 'not a date'
        headline = parse_articles({'articles': [item]})[0]
        assert headline.source_name == 'Source'
        assert headline.published_at is None
        assert headline.meta == 'Unknown date · Source'

    def test_capped_at_limit(self):
        payload = {'articles': [article(i) for i in range(10)]}
        assert len(parse_articles(payload)) == 6

    @pytest.mark.parametrize('payload', [{}, {'articles': None}, [], {'articles': []}])
    def test_empty_payloads(self, payload):
        assert parse_articles(payload) == ()


class TestGNewsClient:
    def test_query_per_view(self, client):
        with mock.patch('drilldown.news.requests.get', return_value=make_response(payload={'articles': [article(1)]})) as get:
            client.fetch(View.NATIONAL)
            client.fetch(View.REGIONAL)
        national_q = get.call_args_list[0].kwargs['params']['q']
        regional_q = get.call_args_list[1].kwargs['params']['q']
        assert national_q == 'crime AND United States'
        assert regional_q == 'crime AND Alameda County OR Oakland AND California'
        params = get.call_args_list[0].kwargs['params']
        assert params['apikey'] == 'test-key'
        assert params['max'] == 6

    def test_success(self, client):
        payload = {'articles': [article(i) for i in range(8)]}
        with mock.patch('drilldown.news.requests.get', return_value=make_response(payload=payload)):
            result = client.fetch(View.REGIONAL)
        assert result.view is View.REGIONAL
        assert len(result.headlines) == 6
        assert result.status == 'Showing 6 latest crime headlines'

    def test_empty_result(self, client):
        with mock.patch('drilldown.news.requests.get', return_value=make_response(payload={'articles': []})):
            result = client.fetch(View.NATIONAL)
        assert result.status == EMPTY_STATUS
        assert result.headlines == ()

    def test_http_error(self, client):
        with mock.patch('drilldown.news.requests.get', return_value=make_response(403, reason='Forbidden')) as get:
            result = client.fetch(View.NATIONAL)
        assert result.status == ERROR_STATUS
        assert get.call_count == 1

    def test_rate_limit_retried(self, client):
        responses = [make_response(429, reason='Too Many Requests'), make_response(payload={'articles': [article(1)]})]
        with mock.patch('drilldown.news.requests.get', side_effect=responses) as get, \
                mock.patch('drilldown.news.time.sleep'):
            result = client.fetch(View.NATIONAL)
        assert get.call_count == 2
        assert len(result.headlines) == 1

    def test_network_error(self, client):
        with mock.patch('drilldown.news.requests.get', side_effect=requests.exceptions.ConnectionError('down')):
            result = client.fetch(View.NATIONAL)
        assert result.status == ERROR_STATUS

    def test_bad_json(self, client):
        response = make_response()
        response.json.side_effect = ValueError('no json')
        with mock.patch('drilldown.news.requests.get', return_value=response):
            result = client.fetch(View.NATIONAL)
        assert result.status == ERROR_STATUS

    def test_missing_key_skips_request(self):
        with mock.patch('drilldown.news.requests.get') as get:
            result = GNewsClient(api_key=None).fetch(View.NATIONAL)
        get.assert_not_called()
        assert result.status == NO_KEY_STATUS
