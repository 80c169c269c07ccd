"""
GitHub Activity Module - Fetch and normalize recent public GitHub events

Two layers:

- ``fetch_activity`` performs one blocking request against
  ``GET /users/{id}/events/public?per_page={n}`` and maps every raw event
  through ``format_event``. Any transport, status or shape problem is raised
  as ``ActivityFetchError``.
- ``ActivityFetcher`` wraps it for non-blocking use: requests run on a small
  worker pool, observers are told about every state transition, and a result
  is applied only while its request is still the most recent one. Responses
  that resolve after a newer fetch started, or after ``close()``, are
  dropped.
"""

import enum
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait as wait_futures
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

GITHUB_API_ROOT = 'https://api.github.com'
DEFAULT_TIMEOUT = 10
USER_ERROR_MESSAGE = 'Failed to load GitHub activity. Please try again later.'
UNKNOWN_REPO = 'unknown'


class ActivityFetchError(Exception):
    """Raised when recent activity cannot be retrieved or understood"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class EventType(enum.Enum):
    PUSH = 'PushEvent'
    PULL_REQUEST = 'PullRequestEvent'
    ISSUE_COMMENT = 'IssueCommentEvent'
    CREATE = 'CreateEvent'
    OTHER = 'Other'

    @classmethod
    def from_raw(cls, tag):
        """Map a raw event type tag to a variant; anything unknown is OTHER"""
        for member in cls:
            if member is not cls.OTHER and member.value == tag:
                return member
        return cls.OTHER


class FetchState(enum.Enum):
    PENDING = 'pending'
    READY = 'ready'
    FAILED = 'failed'


@dataclass(frozen=True)
class NormalizedActivity:
    action: str
    repo: str
    details: str = ''
    date: str = ''
    time: str = ''

    def to_dict(self) -> Dict[str, str]:
        return {
            'action': self.action,
            'repo': self.repo,
            'details': self.details,
            'date': self.date,
            'time': self.time,
        }


@dataclass(frozen=True)
class ActivitySnapshot:
    state: FetchState = FetchState.PENDING
    items: Tuple[NormalizedActivity, ...] = field(default_factory=tuple)
    error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.state is FetchState.PENDING

    def to_dict(self) -> Dict[str, Any]:
        return {
            'state': self.state.value,
            'items': [item.to_dict() for item in self.items],
            'isLoading': self.is_loading,
            'error': self.error,
        }


def _parse_timestamp(value) -> Optional[datetime]:
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_date(moment: Optional[datetime]) -> str:
    """US-style short date, e.g. 1/1/2024"""
    if moment is None:
        return ''
    return f"{moment.month}/{moment.day}/{moment.year}"


def format_time(moment: Optional[datetime]) -> str:
    """US-style 12-hour time, e.g. 10:00:00 AM"""
    if moment is None:
        return ''
    hour = moment.hour % 12 or 12
    suffix = 'AM' if moment.hour < 12 else 'PM'
    return f"{hour}:{moment.minute:02d}:{moment.second:02d} {suffix}"


def _describe(event_type: EventType, payload: Dict[str, Any]) -> Tuple[str, str]:
    """Return (action phrase, details) for one event type"""
    if event_type is EventType.PUSH:
        commits = payload.get('commits')
        count = len(commits) if isinstance(commits, list) else 0
        return 'pushed to', f"{count} commit(s)" if count else ''

    if event_type is EventType.PULL_REQUEST:
        action = payload.get('action') or 'updated'
        pull_request = payload.get('pull_request') or {}
        title = pull_request.get('title') if isinstance(pull_request, dict) else None
        return f"{action} pull request in", title or ''

    if event_type is EventType.ISSUE_COMMENT:
        issue = payload.get('issue') or {}
        title = issue.get('title') if isinstance(issue, dict) else None
        return 'commented on issue in', title or ''

    if event_type is EventType.CREATE:
        ref_type = payload.get('ref_type') or 'repository'
        return f"created {ref_type}", payload.get('ref') or ''

    return 'acted on', ''


def format_event(raw) -> NormalizedActivity:
    """
    Normalize one raw GitHub event for display

    Never raises: unknown or missing types fall back to "acted on", a
    missing payload yields empty details and a missing repo name is
    rendered as "unknown".
    """
    event = raw if isinstance(raw, dict) else {}
    event_type = EventType.from_raw(event.get('type'))
    payload = event.get('payload')
    if not isinstance(payload, dict):
        payload = {}

    repo = event.get('repo')
    repo_name = repo.get('name') if isinstance(repo, dict) else None

    action, details = _describe(event_type, payload)
    moment = _parse_timestamp(event.get('created_at'))
    return NormalizedActivity(
        action=action,
        repo=repo_name or UNKNOWN_REPO,
        details=str(details),
        date=format_date(moment),
        time=format_time(moment),
    )


def _validate_limit(limit):
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")


def fetch_activity(source_id: str, limit: int = 5, session=None,
                   api_root: str = GITHUB_API_ROOT,
                   timeout: float = DEFAULT_TIMEOUT) -> List[NormalizedActivity]:
    """
    Fetch and normalize the most recent public events of a GitHub user

    Args:
        source_id: GitHub user handle
        limit: Maximum number of events to request and return
        session: requests-compatible session (defaults to ``requests``)
        api_root: API base URL
        timeout: Request timeout in seconds

    Returns:
        list: At most ``limit`` NormalizedActivity items

    Raises:
        ValueError: If limit is not a positive integer
        ActivityFetchError: On transport failure, non-2xx status (403/429
            rate limiting included) or a body that is not a JSON array
    """
    _validate_limit(limit)
    if not source_id:
        raise ActivityFetchError('A GitHub user handle is required')

    http = session or requests
    url = f"{api_root.rstrip('/')}/users/{quote(str(source_id), safe='')}/events/public"
    try:
        response = http.get(
            url,
            params={'per_page': limit},
            headers={'Accept': 'application/vnd.github+json'},
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise ActivityFetchError(f"Request for {source_id} failed: {str(e)}") from e

    if not 200 <= response.status_code < 300:
        raise ActivityFetchError(
            f"Failed to fetch GitHub activity: {response.status_code}",
            status_code=response.status_code,
        )

    try:
        events = response.json()
    except ValueError as e:
        raise ActivityFetchError(f"Invalid JSON from GitHub for {source_id}") from e

    if not isinstance(events, list):
        raise ActivityFetchError(
            f"Unexpected GitHub response for {source_id}: {type(events).__name__}")

    return [format_event(event) for event in events[:limit]]


class ActivityFetcher:
    """
    Non-blocking, observable holder of one activity feed

    ``fetch`` never blocks the caller. State moves PENDING -> READY or
    PENDING -> FAILED per request, and only the most recently started
    request may move it. Observers are called with every applied snapshot,
    in order, while the fetcher's lock is held.
    """

    def __init__(self, session=None, api_root: str = GITHUB_API_ROOT,
                 timeout: float = DEFAULT_TIMEOUT, max_workers: int = 2):
        self._session = session
        self._api_root = api_root
        self._timeout = timeout
        self._executor = ThreadPoolExecutor(max_workers=max_workers,
                                            thread_name_prefix='github-activity')
        self._lock = threading.RLock()
        self._observers: List[Callable[[ActivitySnapshot], None]] = []
        self._snapshot = ActivitySnapshot()
        self._generation = 0
        self._latest = None
        self._closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> ActivitySnapshot:
        with self._lock:
            return self._snapshot

    def subscribe(self, callback: Callable[[ActivitySnapshot], None]) -> Callable[[], None]:
        """Register an observer; returns a callable that removes it"""
        with self._lock:
            self._observers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._observers:
                    self._observers.remove(callback)

        return unsubscribe

    def _notify(self, snapshot: ActivitySnapshot):
        for callback in list(self._observers):
            try:
                callback(snapshot)
            except Exception:
                logger.exception('Activity observer failed')

    def fetch(self, source_id: str, limit: int = 5):
        """
        Start fetching activity for ``source_id``

        Returns:
            Future resolving to True when its result was applied, False when
            it was dropped as stale; None when ``source_id`` is empty
        """
        _validate_limit(limit)
        if not source_id:
            logger.debug('Skipping GitHub activity fetch: empty user handle')
            return None

        with self._lock:
            if self._closed:
                raise RuntimeError('ActivityFetcher is closed')
            self._generation += 1
            generation = self._generation
            self._snapshot = ActivitySnapshot(FetchState.PENDING)
            self._notify(self._snapshot)
            future = self._executor.submit(self._run, generation, source_id, limit)
            self._latest = future
        return future

    def _run(self, generation: int, source_id: str, limit: int) -> bool:
        try:
            items = fetch_activity(source_id, limit, session=self._session,
                                   api_root=self._api_root, timeout=self._timeout)
            snapshot = ActivitySnapshot(FetchState.READY, tuple(items), None)
        except ActivityFetchError as e:
            logger.error(f"Error fetching GitHub activity for {source_id}: {str(e)}")
            snapshot = ActivitySnapshot(FetchState.FAILED, (), USER_ERROR_MESSAGE)
        except Exception:
            logger.exception(f"Unexpected error fetching GitHub activity for {source_id}")
            snapshot = ActivitySnapshot(FetchState.FAILED, (), USER_ERROR_MESSAGE)
        return self._apply(generation, snapshot)

    def _apply(self, generation: int, snapshot: ActivitySnapshot) -> bool:
        with self._lock:
            if self._closed or generation != self._generation:
                logger.debug(f"Dropping stale GitHub activity result (request {generation})")
                return False
            self._snapshot = snapshot
            self._notify(snapshot)
            return True

    def wait(self, timeout: Optional[float] = None) -> ActivitySnapshot:
        """Block until the most recent fetch settles, then return the snapshot"""
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            with self._lock:
                latest = self._latest
            if latest is None:
                break
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            done, _ = wait_futures([latest], timeout=remaining)
            if not done:
                break
            with self._lock:
                if self._latest is latest:
                    break
        return self.snapshot()

    def close(self):
        """Detach the fetcher; in-flight results can no longer change state"""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._generation += 1
            self._observers.clear()
        self._executor.shutdown(wait=False, cancel_futures=True)


__all__ = [
    'GITHUB_API_ROOT',
    'DEFAULT_TIMEOUT',
    'USER_ERROR_MESSAGE',
    'ActivityFetchError',
    'EventType',
    'FetchState',
    'NormalizedActivity',
    'ActivitySnapshot',
    'format_event',
    'format_date',
    'format_time',
    'fetch_activity',
    'ActivityFetcher'
]
