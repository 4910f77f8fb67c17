"""Review state machine for add-on releases."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone

from addonhub.exceptions import AddonHubError, ForbiddenError, StorageError
from addonhub.interfaces import AdminFlagAuthorizer, Authorizer, ReleaseStore, ReviewNotifier
from addonhub.regeneration import RegenerationEngine
from addonhub.schema import Actor, Release, Repository

logger = logging.getLogger(__name__)


class ReviewSystem:
    """Verify or reject add-on releases on behalf of administrators.

    A release starts pending. `verify` regenerates the add-on record first and
    only then flips the release to verified; `reject` only touches the release.
    Both may be applied again to an already reviewed release.
    """

    def __init__(
        self,
        *,
        engine: RegenerationEngine,
        releases: ReleaseStore,
        notifier: ReviewNotifier,
        authorizer: Authorizer | None = None,
    ) -> None:
        self.engine = engine
        self.releases = releases
        self.notifier = notifier
        self.authorizer = authorizer or AdminFlagAuthorizer()

    async def verify(self, *, actor: Actor, repository: Repository, release: Release) -> Release:
        """Verify one release and publish it as the add-on's current version."""
        self._require_admin(actor, "verify", release)
        await self.engine.regenerate(repository, release)
        verified = replace(
            release,
            is_verified=True,
            is_rejected=False,
            rejection_reason="",
            reviewed_at=_utc_now(),
        )
        await self._store(verified)
        logger.info("Release %s of repository %s verified by %s", release.id, repository.id, actor.user_id)
        await self._notify(verified)
        return verified

    async def reject(self, *, actor: Actor, repository: Repository, release: Release, reason: str) -> Release:
        """Reject one release with a reason shown to the repository owner."""
        self._require_admin(actor, "reject", release)
        rejected = replace(
            release,
            is_verified=False,
            is_rejected=True,
            rejection_reason=reason.strip(),
            reviewed_at=_utc_now(),
        )
        await self._store(rejected)
        logger.info("Release %s of repository %s rejected by %s", release.id, repository.id, actor.user_id)
        await self._notify(rejected)
        return rejected

    def _require_admin(self, actor: Actor, action: str, release: Release) -> None:
        if not self.authorizer.is_administrator(actor):
            raise ForbiddenError(
                f"only administrators can {action} add-on releases",
                repo_id=release.repo_id,
                release_id=release.id,
            )

    async def _store(self, release: Release) -> None:
        try:
            await self.releases.save_review(release)
        except AddonHubError:
            raise
        except Exception as exc:
            raise StorageError(
                f"cannot update release with tag {release.tag_name!r}: {exc}",
                repo_id=release.repo_id,
                release_id=release.id,
            ) from exc

    async def _notify(self, release: Release) -> None:
        try:
            await self.notifier.notify_owner_of_review(release)
        except Exception:
            logger.exception(
                "Failed to notify owner about review of release %s (repository %s)",
                release.id,
                release.repo_id,
            )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)
