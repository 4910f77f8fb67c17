"""Repository layer for add-on record persistence."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from addonhub.db import session_scope
from addonhub.exceptions import RecordConflictError, StorageError
from addonhub.models import AddonRecord

logger = logging.getLogger(__name__)


class AddonRecordStore:
    """Get, insert and fully update add-on records, one transaction per call."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], *, tenant_id: str = "default") -> None:
        self._session_factory = session_factory
        self.tenant_id = tenant_id

    async def get(self, repo_id: int) -> AddonRecord | None:
        stmt = select(AddonRecord).where(
            AddonRecord.tenant_id == self.tenant_id,
            AddonRecord.repo_id == repo_id,
        )
        try:
            async with session_scope(self._session_factory) as session:
                return await session.scalar(stmt)
        except SQLAlchemyError as exc:
            raise StorageError(f"cannot load add-on record: {exc}", repo_id=repo_id) from exc

    async def insert(self, record: AddonRecord) -> AddonRecord:
        """Insert a new record.

        Raises:
            RecordConflictError: another record for the repository already exists.
            StorageError: any other persistence failure.
        """
        record.tenant_id = self.tenant_id
        try:
            async with session_scope(self._session_factory) as session:
                session.add(record)
                await session.flush()
                await session.refresh(record)
        except IntegrityError as exc:
            raise RecordConflictError(
                f"add-on record for repository {record.repo_id} already exists",
                repo_id=record.repo_id,
                release_id=record.release_id,
            ) from exc
        except SQLAlchemyError as exc:
            raise StorageError(
                f"cannot insert add-on record: {exc}",
                repo_id=record.repo_id,
                release_id=record.release_id,
            ) from exc
        logger.debug("Inserted add-on record for repository %s", record.repo_id)
        return record

    async def update_all_fields(self, record: AddonRecord) -> AddonRecord:
        """Write every data column of an existing record in one statement."""
        try:
            async with session_scope(self._session_factory) as session:
                current = await session.get(AddonRecord, record.id)
                if current is None:
                    raise StorageError(
                        "add-on record vanished before update",
                        repo_id=record.repo_id,
                        release_id=record.release_id,
                    )
                current.release_id = record.release_id
                current.info_file = record.info_file
                current.md5 = record.md5
                current.screenshots = record.screenshots
                await session.flush()
                await session.refresh(current)
        except SQLAlchemyError as exc:
            raise StorageError(
                f"cannot update add-on record: {exc}",
                repo_id=record.repo_id,
                release_id=record.release_id,
            ) from exc
        logger.debug("Updated add-on record for repository %s", record.repo_id)
        return current
