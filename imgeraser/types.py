"""ImageJob and ImageList resources and their JSON representations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from .scheme import V1, V1ALPHA1, Scheme

__all__ = [
    "Image",
    "JobPhase",
    "ObjectMeta",
    "ListMeta",
    "ImageJobStatus",
    "ImageJob",
    "ImageJobList",
    "ImageListSpec",
    "ImageListStatus",
    "ImageList",
    "ImageListList",
    "add_to_scheme",
]

_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _format_time(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(_TIME_FORMAT)


def _parse_time(text: str | None) -> datetime | None:
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _type_meta(data: Mapping[str, Any], expected_kind: str) -> str:
    kind = data.get("kind") or expected_kind
    if kind != expected_kind:
        raise ValueError(f"expected kind {expected_kind!r}, got {kind!r}")
    return data.get("apiVersion") or V1.api_version


def _type_dict(api_version: str, kind: str) -> dict[str, Any]:
    result: dict[str, Any] = {}
    if api_version:
        result["apiVersion"] = api_version
    if kind:
        result["kind"] = kind
    return result


@dataclass
class Image:
    """An image present on a node, with its names and digests."""

    image_id: str
    names: list[str] = field(default_factory=list)
    digests: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"image_id": self.image_id}
        if self.names:
            result["names"] = list(self.names)
        if self.digests:
            result["digests"] = list(self.digests)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Image:
        return cls(
            image_id=data.get("image_id") or "",
            names=list(data.get("names") or []),
            digests=list(data.get("digests") or []),
        )


class JobPhase(str, Enum):
    """The phase of an ImageJob."""

    RUNNING = "Running"
    COMPLETED = "Completed"
    FAILED = "Failed"


@dataclass
class ObjectMeta:
    """Identifying metadata of a resource."""

    name: str = ""
    namespace: str = ""
    uid: str = ""
    resource_version: str = ""
    generation: int = 0
    creation_timestamp: datetime | None = None
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)

    def _to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.name:
            result["name"] = self.name
        if self.namespace:
            result["namespace"] = self.namespace
        if self.uid:
            result["uid"] = self.uid
        if self.resource_version:
            result["resourceVersion"] = self.resource_version
        if self.generation:
            result["generation"] = self.generation
        result["creationTimestamp"] = _format_time(self.creation_timestamp)
        if self.labels:
            result["labels"] = dict(self.labels)
        if self.annotations:
            result["annotations"] = dict(self.annotations)
        return result

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> ObjectMeta:
        data = data or {}
        return cls(
            name=data.get("name") or "",
            namespace=data.get("namespace") or "",
            uid=data.get("uid") or "",
            resource_version=data.get("resourceVersion") or "",
            generation=int(data.get("generation") or 0),
            creation_timestamp=_parse_time(data.get("creationTimestamp")),
            labels=dict(data.get("labels") or {}),
            annotations=dict(data.get("annotations") or {}),
        )


@dataclass
class ListMeta:
    """Metadata of a list of resources."""

    resource_version: str = ""
    continue_token: str = ""
    remaining_item_count: int | None = None

    def _to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.resource_version:
            result["resourceVersion"] = self.resource_version
        if self.continue_token:
            result["continue"] = self.continue_token
        if self.remaining_item_count is not None:
            result["remainingItemCount"] = self.remaining_item_count
        return result

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> ListMeta:
        data = data or {}
        remaining = data.get("remainingItemCount")
        return cls(
            resource_version=data.get("resourceVersion") or "",
            continue_token=data.get("continue") or "",
            remaining_item_count=None if remaining is None else int(remaining),
        )


@dataclass
class ImageJobStatus:
    """Observed state of an ImageJob: pod counts, phase and deletion time."""

    failed: int = 0
    succeeded: int = 0
    desired: int = 0
    skipped: int = 0
    phase: JobPhase | None = None
    delete_after: datetime | None = None

    def _to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "failed": self.failed,
            "succeeded": self.succeeded,
            "desired": self.desired,
            "skipped": self.skipped,
            "phase": self.phase.value if self.phase else "",
        }
        if self.delete_after is not None:
            result["deleteAfter"] = _format_time(self.delete_after)
        return result

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> ImageJobStatus:
        data = data or {}
        phase = data.get("phase") or ""
        return cls(
            failed=int(data.get("failed") or 0),
            succeeded=int(data.get("succeeded") or 0),
            desired=int(data.get("desired") or 0),
            skipped=int(data.get("skipped") or 0),
            phase=JobPhase(phase) if phase else None,
            delete_after=_parse_time(data.get("deleteAfter")),
        )


@dataclass
class ImageJob:
    """A job that runs image removal across nodes."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    status: ImageJobStatus = field(default_factory=ImageJobStatus)
    api_version: str = V1.api_version
    kind: str = "ImageJob"

    def to_dict(self) -> dict[str, Any]:
        result = _type_dict(self.api_version, self.kind)
        result["metadata"] = self.metadata._to_dict()
        result["status"] = self.status._to_dict()
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ImageJob:
        api_version = _type_meta(data, "ImageJob")
        return cls(
            metadata=ObjectMeta._from_dict(data.get("metadata")),
            status=ImageJobStatus._from_dict(data.get("status")),
            api_version=api_version,
        )


@dataclass
class ImageJobList:
    """A list of ImageJobs."""

    items: list[ImageJob] = field(default_factory=list)
    metadata: ListMeta = field(default_factory=ListMeta)
    api_version: str = V1.api_version
    kind: str = "ImageJobList"

    def to_dict(self) -> dict[str, Any]:
        result = _type_dict(self.api_version, self.kind)
        result["metadata"] = self.metadata._to_dict()
        result["items"] = [item.to_dict() for item in self.items]
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ImageJobList:
        api_version = _type_meta(data, "ImageJobList")
        return cls(
            items=[ImageJob.from_dict(item) for item in data.get("items") or []],
            metadata=ListMeta._from_dict(data.get("metadata")),
            api_version=api_version,
        )


@dataclass
class ImageListSpec:
    """The images to delete when they are not running."""

    images: list[str] = field(default_factory=list)

    def _to_dict(self) -> dict[str, Any]:
        return {"images": list(self.images)}

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> ImageListSpec:
        data = data or {}
        return cls(images=list(data.get("images") or []))


@dataclass
class ImageListStatus:
    """Outcome of the last job run for an ImageList."""

    timestamp: datetime | None = None
    success: int = 0
    failed: int = 0
    skipped: int = 0

    def _to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": _format_time(self.timestamp),
            "success": self.success,
            "failed": self.failed,
            "skipped": self.skipped,
        }

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> ImageListStatus:
        data = data or {}
        return cls(
            timestamp=_parse_time(data.get("timestamp")),
            success=int(data.get("success") or 0),
            failed=int(data.get("failed") or 0),
            skipped=int(data.get("skipped") or 0),
        )


@dataclass
class ImageList:
    """A list of non-compliant images to remove from the cluster."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ImageListSpec = field(default_factory=ImageListSpec)
    status: ImageListStatus = field(default_factory=ImageListStatus)
    api_version: str = V1.api_version
    kind: str = "ImageList"

    def to_dict(self) -> dict[str, Any]:
        result = _type_dict(self.api_version, self.kind)
        result["metadata"] = self.metadata._to_dict()
        result["spec"] = self.spec._to_dict()
        result["status"] = self.status._to_dict()
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ImageList:
        api_version = _type_meta(data, "ImageList")
        return cls(
            metadata=ObjectMeta._from_dict(data.get("metadata")),
            spec=ImageListSpec._from_dict(data.get("spec")),
            status=ImageListStatus._from_dict(data.get("status")),
            api_version=api_version,
        )


@dataclass
class ImageListList:
    """A list of ImageLists."""

    items: list[ImageList] = field(default_factory=list)
    metadata: ListMeta = field(default_factory=ListMeta)
    api_version: str = V1.api_version
    kind: str = "ImageListList"

    def to_dict(self) -> dict[str, Any]:
        result = _type_dict(self.api_version, self.kind)
        result["metadata"] = self.metadata._to_dict()
        result["items"] = [item.to_dict() for item in self.items]
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ImageListList:
        api_version = _type_meta(data, "ImageListList")
        return cls(
            items=[ImageList.from_dict(item) for item in data.get("items") or []],
            metadata=ListMeta._from_dict(data.get("metadata")),
            api_version=api_version,
        )


def add_to_scheme(scheme: Scheme) -> None:
    """Register the job and list kinds for every served API version."""
    for group_version in (V1, V1ALPHA1):
        scheme.register(group_version, "ImageJob", ImageJob)
        scheme.register(group_version, "ImageJobList", ImageJobList)
        scheme.register(group_version, "ImageList", ImageList)
        scheme.register(group_version, "ImageListList", ImageListList)