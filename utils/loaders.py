"""
Loaders Module - One-shot reads of named remote collections

A load issues exactly one gateway query. Failures are logged and degrade to
the caller's fallback (or an empty list); they are never raised to the view.
"""

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from flask import current_app
from .gateway import GatewayError, gateway as default_gateway


class LoadState(enum.Enum):
    LOADING = 'loading'
    READY = 'ready'
    EMPTY = 'empty'
    ERROR = 'error'


@dataclass
class CollectionResult:
    state: LoadState = LoadState.LOADING
    items: List[Dict[str, Any]] = field(default_factory=list)
    used_fallback: bool = False

    @property
    def is_loading(self) -> bool:
        return self.state is LoadState.LOADING

    def to_dict(self) -> Dict[str, Any]:
        return {
            'state': self.state.value,
            'items': self.items,
            'isLoading': self.is_loading,
            'usedFallback': self.used_fallback,
        }


def load_collection(table: str,
                    filters: Optional[Dict[str, Any]] = None,
                    since: Optional[Dict[str, Any]] = None,
                    order_by: Optional[str] = None,
                    ascending: bool = True,
                    limit: Optional[int] = None,
                    fallback: Optional[List[Dict[str, Any]]] = None,
                    gateway=None) -> CollectionResult:
    """
    Load a named collection through the gateway

    Args:
        table: Collection (table) name
        filters: Equality filters, e.g. {'is_approved': True}
        since: Lower-bound filters, e.g. {'meeting_time': now}
        order_by: Column to order by
        ascending: Sort direction
        limit: Row limit passed to the gateway
        fallback: Content to show when the collection is empty or unreadable
        gateway: Gateway to query (defaults to the process-wide handle)

    Returns:
        CollectionResult in READY, EMPTY or ERROR state
    """
    gateway = gateway or default_gateway
    try:
        items = gateway.select(table, eq=filters, gte=since, order_by=order_by,
                               ascending=ascending, limit=limit)
    except GatewayError as e:
        current_app.logger.error(f"Error fetching {table}: {str(e)}")
        if fallback is not None:
            return CollectionResult(LoadState.ERROR, list(fallback), used_fallback=True)
        return CollectionResult(LoadState.ERROR, [])

    if not items:
        if fallback is not None:
            return CollectionResult(LoadState.EMPTY, list(fallback), used_fallback=True)
        return CollectionResult(LoadState.EMPTY, [])

    return CollectionResult(LoadState.READY, items)


__all__ = [
    'LoadState',
    'CollectionResult',
    'load_collection'
]
