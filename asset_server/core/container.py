"""Simple dependency container for wiring core services."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from asset_server.core.config import Settings
from asset_server.core.secrets import resolve_database_url
from asset_server.infrastructure.database.session import Database, init_db
from asset_server.modules.activity import ActivityRecorder, LoggingActivityRecorder
from asset_server.modules.storage import BlobStorage, create_blob_storage

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    database: Optional[Database] = None
    storage: Optional[BlobStorage] = None
    activity: ActivityRecorder = field(default_factory=LoggingActivityRecorder)

    @property
    def is_open(self) -> bool:
        return self.database is not None and self.database.is_open

    async def open(self) -> None:
        """Resolve credentials once and create the infrastructure singletons."""
        if self.is_open:
            return
        if self.database is None:
            self.database = Database.from_settings(self.settings, resolve_database_url(self.settings))
        self.database.open()
        if self.storage is None:
            self.storage = create_blob_storage(self.settings)
        if not self.settings.is_production:
            await init_db(self.database)
        logger.info("Container opened (environment=%s)", self.settings.environment)

    async def close(self) -> None:
        if self.database is not None:
            await self.database.close()
        logger.info("Container closed")


__all__ = ["ApplicationContainer"]
