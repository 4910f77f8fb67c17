"""Request/response schemas for AddonHub API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from addonhub.schema import AddonDescriptor, Release


class RejectRequest(BaseModel):
    """Reject action payload."""

    reason: str = Field(min_length=1, max_length=2000)


class ReleaseReviewResponse(BaseModel):
    """Review state of one release after a review action."""

    repo_id: int
    release_id: int
    tag_name: str
    status: str
    is_verified: bool
    is_rejected: bool
    rejection_reason: str
    reviewed_at: datetime | None = None

    @classmethod
    def from_release(cls, release: Release) -> ReleaseReviewResponse:
        return cls(
            repo_id=release.repo_id,
            release_id=release.id,
            tag_name=release.tag_name,
            status=release.review_status.value,
            is_verified=release.is_verified,
            is_rejected=release.is_rejected,
            rejection_reason=release.rejection_reason,
            reviewed_at=release.reviewed_at,
        )


class AddonVersionResponse(BaseModel):
    commit: str
    title: str
    description: str
    created_at: datetime


class AddonScreenshotsResponse(BaseModel):
    base_url: str
    files: list[str] = Field(default_factory=list)


class AddonDescriptorResponse(BaseModel):
    """JSON view of one add-on descriptor."""

    id: str
    version: AddonVersionResponse
    type: str
    title: str
    description: str
    author: str
    license: str
    origin_url: str
    url: str
    upstream_url: str
    md5: str
    screenshots: AddonScreenshotsResponse
    dependencies: list[AddonDescriptorResponse] = Field(default_factory=list)

    @classmethod
    def from_descriptor(cls, addon: AddonDescriptor) -> AddonDescriptorResponse:
        return cls(
            id=addon.id,
            version=AddonVersionResponse(
                commit=addon.version.commit,
                title=addon.version.title,
                description=addon.version.description,
                created_at=addon.version.created_at,
            ),
            type=addon.type.value,
            title=addon.title,
            description=addon.description,
            author=addon.author,
            license=addon.license,
            origin_url=addon.origin_url,
            url=addon.url,
            upstream_url=addon.upstream_url,
            md5=addon.md5,
            screenshots=AddonScreenshotsResponse(
                base_url=addon.screenshots.base_url,
                files=list(addon.screenshots.files),
            ),
            dependencies=[cls.from_descriptor(item) for item in addon.dependencies],
        )


AddonDescriptorResponse.model_rebuild()
