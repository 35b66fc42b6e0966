"""Activity records for assets.

Tags, status entries and activity logs live in an external record store keyed by
asset id. The service only ever hands it ids of assets whose ownership it has
already verified.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)


class ActivityRecorder(Protocol):
    async def record(
        self,
        *,
        asset_id: str,
        principal_id: str,
        action: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        ...


@dataclass(slots=True)
class ActivityEntry:
    asset_id: str
    principal_id: str
    action: str
    details: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class LoggingActivityRecorder:
    """Writes one structured log line per activity."""

    async def record(
        self,
        *,
        asset_id: str,
        principal_id: str,
        action: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        entry = ActivityEntry(asset_id=asset_id, principal_id=principal_id, action=action, details=details or {})
        logger.info(
            json.dumps(
                {
                    "ts": entry.created_at.isoformat(),
                    "asset_id": entry.asset_id,
                    "principal_id": entry.principal_id,
                    "action": entry.action,
                    "details": entry.details,
                },
                ensure_ascii=False,
                default=str,
            )
        )
