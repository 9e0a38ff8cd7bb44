from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Tuple

from opsboard.config import Settings
from opsboard.errors import QueryFailure

logger = logging.getLogger(__name__)

FILTER_OPS = {"eq", "neq", "gt", "gte", "lt", "lte"}


@dataclass(frozen=True)
class QuerySpec:
    table: str
    columns: str = "*"
    filters: Tuple[Tuple[str, str, Any], ...] = field(default_factory=tuple)
    order_by: Optional[str] = None
    descending: bool = False
    limit: Optional[int] = None


class QueryStore(Protocol):
    def query(self, spec: QuerySpec) -> List[Dict[str, Any]]:
        """Run `spec` and return the raw rows; raise QueryFailure on error."""
        ...


class SupabaseStore:
    """QueryStore backed by a Supabase (PostgREST) client."""

    def __init__(self, client: Any):
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseStore":
        from supabase import create_client

        settings.require_supabase()
        return cls(create_client(settings.supabase_url, settings.supabase_key))

    def query(self, spec: QuerySpec) -> List[Dict[str, Any]]:
        try:
            request = self.client.table(spec.table).select(spec.columns)
            for column, op, value in spec.filters:
                if op not in FILTER_OPS:
                    raise QueryFailure(spec.table, f"unsupported filter op {op!r}")
                request = getattr(request, op)(column, value)
            if spec.order_by:
                request = request.order(spec.order_by, desc=spec.descending)
            if spec.limit is not None:
                request = request.limit(spec.limit)
            response = request.execute()
        except QueryFailure:
            raise
        except Exception as exc:
            raise QueryFailure(spec.table, f"{type(exc).__name__}: {exc}") from exc

        data = getattr(response, "data", None)
        if data is None:
            raise QueryFailure(spec.table, "no data in response")
        if not isinstance(data, list):
            raise QueryFailure(spec.table, f"expected a list of rows, got {type(data).__name__}")
        logger.debug("%s returned %d rows", spec.table, len(data))
        return data
