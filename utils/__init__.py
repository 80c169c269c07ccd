"""
Utils Package - Centralized utility modules initialization
"""

from .auth import AuthStatus, get_auth_status
from .decorators import login_required, owner_required
from .data import row_to_dict, user_to_dict, parse_datetime
from .gateway import GatewayError, DataGateway, ObjectStorage, gateway, storage
from .loaders import LoadState, CollectionResult, load_collection
from .github_activity import (
    ActivityFetchError,
    ActivityFetcher,
    ActivitySnapshot,
    EventType,
    FetchState,
    NormalizedActivity,
    fetch_activity,
    format_event
)
from .tabs import ABOUT_TABS, TabSelector
from .badges import get_status_badge, get_platform_icon, with_icons
from .notifications import send_admin_notification
from .security import get_client_ip, check_rate_limit, verify_password
from .helpers import allowed_file

__all__ = [
    # Auth
    'AuthStatus',
    'get_auth_status',
    'login_required',
    'owner_required',

    # Data
    'row_to_dict',
    'user_to_dict',
    'parse_datetime',
    'GatewayError',
    'DataGateway',
    'ObjectStorage',
    'gateway',
    'storage',
    'LoadState',
    'CollectionResult',
    'load_collection',

    # GitHub activity
    'ActivityFetchError',
    'ActivityFetcher',
    'ActivitySnapshot',
    'EventType',
    'FetchState',
    'NormalizedActivity',
    'fetch_activity',
    'format_event',

    # UI state
    'ABOUT_TABS',
    'TabSelector',
    'get_status_badge',
    'get_platform_icon',
    'with_icons',

    # Notifications / Security / Helpers
    'send_admin_notification',
    'get_client_ip',
    'check_rate_limit',
    'verify_password',
    'allowed_file'
]
