import threading
import time

import pytest
import requests

from utils import github_activity
from utils.github_activity import (
    ActivityFetchError,
    ActivityFetcher,
    EventType,
    FetchState,
    USER_ERROR_MESSAGE,
    fetch_activity,
    format_event,
)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, reason='OK', invalid_json=False):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError('No JSON object could be decoded')
        return self._payload


class FakeSession:
    """requests-compatible session that answers from a handler"""

    def __init__(self, handler):
        self.handler = handler
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({'url': url, 'params': params, 'headers': headers, 'timeout': timeout})
        result = self.handler(url, params)
        if isinstance(result, Exception):
            raise result
        return result


def push_event(repo='u/repo', commits=3, created_at='2024-01-01T10:00:00Z'):
    return {
        'type': 'PushEvent',
        'repo': {'name': repo},
        'payload': {'commits': [{}] * commits},
        'created_at': created_at,
    }


def test_push_event_is_normalized():
    item = format_event(push_event())

    assert item.action == 'pushed to'
    assert item.repo == 'u/repo'
    assert item.details == '3 commit(s)'
    assert item.date == '1/1/2024'
    assert item.time == '10:00:00 AM'


@pytest.mark.parametrize('raw, action, details', [
    ({'type': 'PullRequestEvent', 'payload': {'action': 'opened', 'pull_request': {'title': 'Fix bug'}}},
     'opened pull request in', 'Fix bug'),
    ({'type': 'PullRequestEvent', 'payload': {'pull_request': {'title': 'Refactor'}}},
     'updated pull request in', 'Refactor'),
    ({'type': 'IssueCommentEvent', 'payload': {'issue': {'title': 'Crash on start'}}},
     'commented on issue in', 'Crash on start'),
    ({'type': 'CreateEvent', 'payload': {'ref_type': 'branch', 'ref': 'feature-x'}},
     'created branch', 'feature-x'),
    ({'type': 'CreateEvent', 'payload': {'ref_type': 'repository', 'ref': None}},
     'created repository', ''),
    ({'type': 'PushEvent', 'payload': {'commits': []}}, 'pushed to', ''),
    ({'type': 'WatchEvent', 'payload': {'action': 'started'}}, 'acted on', ''),
    ({'type': None}, 'acted on', ''),
])
def test_event_types_map_to_actions(raw, action, details):
    item = format_event(dict(raw, repo={'name': 'u/repo'}, created_at='2024-03-05T15:04:05Z'))

    assert item.action == action
    assert item.details == details
    assert item.date == '3/5/2024'
    assert item.time == '3:04:05 PM'


def test_format_event_tolerates_missing_fields():
    item = format_event({'type': 'PushEvent'})

    assert item.action == 'pushed to'
    assert item.repo == 'unknown'
    assert item.details == ''
    assert item.date == ''
    assert item.time == ''


def test_event_type_is_total():
    assert EventType.from_raw('PushEvent') is EventType.PUSH
    assert EventType.from_raw('ForkEvent') is EventType.OTHER
    assert EventType.from_raw('Other') is EventType.OTHER
    assert EventType.from_raw(None) is EventType.OTHER


def test_fetch_activity_requests_public_events():
    session = FakeSession(lambda url, params: FakeResponse(200, [push_event()]))

    items = fetch_activity('octo cat', limit=4, session=session,
                           api_root='https://api.example.test/', timeout=3)

    assert len(items) == 1
    call = session.calls[0]
    assert call['url'] == 'https://api.example.test/users/octo%20cat/events/public'
    assert call['params'] == {'per_page': 4}
    assert call['timeout'] == 3


def test_fetch_activity_never_returns_more_than_limit():
    events = [push_event(repo=f'u/repo-{i}') for i in range(10)]
    session = FakeSession(lambda url, params: FakeResponse(200, events))

    items = fetch_activity('u', limit=3, session=session)

    assert [item.repo for item in items] == ['u/repo-0', 'u/repo-1', 'u/repo-2']
    assert all(item.action and item.repo for item in items)


@pytest.mark.parametrize('response', [
    FakeResponse(403, {'message': 'API rate limit exceeded'}, reason='Forbidden'),
    FakeResponse(429, {}, reason='Too Many Requests'),
    FakeResponse(500, {}, reason='Server Error'),
    FakeResponse(200, invalid_json=True),
    FakeResponse(200, {'message': 'Not Found'}),
])
def test_fetch_activity_rejects_bad_responses(response):
    session = FakeSession(lambda url, params: response)

    with pytest.raises(ActivityFetchError):
        fetch_activity('u', session=session)


def test_fetch_activity_wraps_transport_errors():
    session = FakeSession(lambda url, params: requests.ConnectionError('connection refused'))

    with pytest.raises(ActivityFetchError):
        fetch_activity('u', session=session)


def test_fetch_activity_reports_status_code():
    session = FakeSession(lambda url, params: FakeResponse(403, {}))

    with pytest.raises(ActivityFetchError) as excinfo:
        fetch_activity('u', session=session)

    assert excinfo.value.status_code == 403


@pytest.mark.parametrize('limit', [0, -1, True, '5'])
def test_fetch_activity_rejects_invalid_limit(limit):
    with pytest.raises(ValueError):
        fetch_activity('u', limit=limit, session=FakeSession(lambda url, params: FakeResponse()))


def test_fetcher_moves_from_pending_to_ready():
    session = FakeSession(lambda url, params: FakeResponse(200, [push_event()]))
    states = []

    with ActivityFetcher(session=session) as fetcher:
        assert fetcher.snapshot().is_loading
        fetcher.subscribe(lambda snapshot: states.append(snapshot.state))
        future = fetcher.fetch('u', 5)

        assert future.result(timeout=5) is True
        snapshot = fetcher.snapshot()

    assert states == [FetchState.PENDING, FetchState.READY]
    assert snapshot.state is FetchState.READY
    assert not snapshot.is_loading
    assert snapshot.error is None
    assert snapshot.items[0].details == '3 commit(s)'


def test_fetcher_failure_shows_generic_message():
    session = FakeSession(lambda url, params: FakeResponse(403, {}, reason='rate limit exceeded'))

    with ActivityFetcher(session=session) as fetcher:
        fetcher.fetch('u', 5).result(timeout=5)
        snapshot = fetcher.snapshot()

    assert snapshot.state is FetchState.FAILED
    assert snapshot.items == ()
    assert not snapshot.is_loading
    assert snapshot.error == USER_ERROR_MESSAGE
    assert 'rate limit' not in snapshot.error


def test_fetcher_skips_empty_source():
    session = FakeSession(lambda url, params: FakeResponse(200, []))

    with ActivityFetcher(session=session) as fetcher:
        assert fetcher.fetch('', 5) is None

    assert session.calls == []


def test_stale_response_is_dropped():
    release_first = threading.Event()

    def handler(url, params):
        if '/users/a/' in url:
            release_first.wait(5)
            return FakeResponse(200, [push_event(repo='a/repo')])
        return FakeResponse(200, [push_event(repo='b/repo')])

    fetcher = ActivityFetcher(session=FakeSession(handler), max_workers=2)
    try:
        first = fetcher.fetch('a', 5)
        second = fetcher.fetch('b', 5)

        assert second.result(timeout=5) is True
        release_first.set()
        assert first.result(timeout=5) is False

        snapshot = fetcher.snapshot()
        assert snapshot.state is FetchState.READY
        assert [item.repo for item in snapshot.items] == ['b/repo']
    finally:
        release_first.set()
        fetcher.close()


def test_close_discards_in_flight_result():
    started = threading.Event()
    release = threading.Event()
    seen = []

    def handler(url, params):
        started.set()
        release.wait(5)
        return FakeResponse(200, [push_event()])

    fetcher = ActivityFetcher(session=FakeSession(handler), max_workers=1)
    future = fetcher.fetch('u', 5)
    fetcher.subscribe(seen.append)
    assert started.wait(5)

    fetcher.close()
    release.set()

    assert future.result(timeout=5) is False
    assert fetcher.closed
    assert fetcher.snapshot().state is FetchState.PENDING
    assert seen == []
    with pytest.raises(RuntimeError):
        fetcher.fetch('u', 5)


def test_wait_returns_settled_snapshot():
    session = FakeSession(lambda url, params: FakeResponse(200, [push_event()]))

    with ActivityFetcher(session=session) as fetcher:
        fetcher.fetch('u', 2)
        snapshot = fetcher.wait(timeout=5)

    assert snapshot.to_dict()['isLoading'] is False
    assert snapshot.to_dict()['items'][0]['repo'] == 'u/repo'


def test_unsubscribed_observer_is_not_called():
    session = FakeSession(lambda url, params: FakeResponse(200, []))
    seen = []

    with ActivityFetcher(session=session) as fetcher:
        unsubscribe = fetcher.subscribe(seen.append)
        unsubscribe()
        fetcher.fetch('u', 1).result(timeout=5)

    assert seen == []


def test_activity_route_returns_snapshot(client, monkeypatch):
    calls = []

    def fake_get(url, params=None, headers=None, timeout=None):
        calls.append(url)
        return FakeResponse(200, [push_event(), push_event(repo='u/other')])

    monkeypatch.setattr(github_activity.requests, 'get', fake_get)

    response = client.get('/api/github-activity?username=octocat&limit=1')

    assert response.status_code == 200
    data = response.get_json()
    assert data['state'] == 'ready'
    assert data['isLoading'] is False
    assert data['error'] is None
    assert data['username'] == 'octocat'
    assert len(data['items']) == 1
    assert calls[0].endswith('/users/octocat/events/public')


def test_activity_route_hides_upstream_failure(client, monkeypatch):
    monkeypatch.setattr(github_activity.requests, 'get',
                        lambda *args, **kwargs: FakeResponse(429, {}))

    data = client.get('/api/github-activity?username=octocat').get_json()

    assert data['state'] == 'failed'
    assert data['items'] == []
    assert data['error'] == USER_ERROR_MESSAGE


def test_activity_route_rejects_bad_limit(client):
    assert client.get('/api/github-activity?limit=0').status_code == 400
    assert client.get('/api/github-activity?limit=101').status_code == 400


@pytest.mark.parametrize('error', [OSError('socket closed'), KeyError('payload')])
def test_unexpected_errors_end_in_failed_state(error):
    session = FakeSession(lambda url, params: error)

    with ActivityFetcher(session=session) as fetcher:
        assert fetcher.fetch('u', 3).result(timeout=5) is True
        snapshot = fetcher.snapshot()

    assert snapshot.state is FetchState.FAILED
    assert not snapshot.is_loading
    assert snapshot.error == USER_ERROR_MESSAGE


def test_wait_respects_total_timeout_across_refetches():
    release = threading.Event()

    def handler(url, params):
        if '/users/a/' in url:
            # a newer request replaces this one before it settles
            time.sleep(0.4)
            fetcher.fetch('b', 1)
        else:
            release.wait(5)
        return FakeResponse(200, [])

    fetcher = ActivityFetcher(session=FakeSession(handler), max_workers=4)
    try:
        fetcher.fetch('a', 1)

        started = time.monotonic()
        snapshot = fetcher.wait(timeout=0.6)
        elapsed = time.monotonic() - started

        assert snapshot.is_loading
        assert elapsed < 0.9
    finally:
        release.set()
        fetcher.close()
