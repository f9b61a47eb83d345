"""API group versions and a registry that maps kinds to Python classes."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

__all__ = ["GROUP_NAME", "GroupVersion", "Scheme", "SchemeError", "V1", "V1ALPHA1"]


class SchemeError(ValueError):
    """Raised for unknown or conflicting kinds and malformed versions."""


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with one of its versions."""

    group: str
    version: str

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version

    def __str__(self) -> str:
        return self.api_version

    @classmethod
    def parse(cls, api_version: str) -> GroupVersion:
        """Parse ``"group/version"`` or a bare ``"version"`` of the core group."""
        if not api_version:
            return cls("", "")
        parts = api_version.split("/")
        if len(parts) == 1:
            return cls("", parts[0])
        if len(parts) == 2:
            return cls(parts[0], parts[1])
        raise SchemeError(f"unexpected GroupVersion string: {api_version}")


GROUP_NAME = "eraser.sh"
V1 = GroupVersion(GROUP_NAME, "v1")
V1ALPHA1 = GroupVersion(GROUP_NAME, "v1alpha1")


class Scheme:
    """Maps (group version, kind) pairs to classes with a ``from_dict``."""

    def __init__(self) -> None:
        self._types: dict[tuple[GroupVersion, str], type] = {}

    def register(self, group_version: GroupVersion, kind: str, cls: type) -> None:
        key = (group_version, kind)
        existing = self._types.get(key)
        if existing is not None and existing is not cls:
            raise SchemeError(
                f"kind {kind!r} in {group_version} is already registered "
                f"to {existing.__name__}"
            )
        self._types[key] = cls

    def lookup(self, api_version: str | GroupVersion, kind: str) -> type:
        group_version = (
            api_version
            if isinstance(api_version, GroupVersion)
            else GroupVersion.parse(api_version)
        )
        try:
            return self._types[(group_version, kind)]
        except KeyError:
            raise SchemeError(
                f'no kind "{kind}" is registered for version "{group_version}"'
            ) from None

    def decode(self, data: str | bytes | Mapping[str, Any]) -> Any:
        """Build the registered object described by a JSON document or mapping."""
        if isinstance(data, (str, bytes, bytearray)):
            try:
                data = json.loads(data)
            except json.JSONDecodeError as exc:
                raise SchemeError(f"invalid JSON: {exc}") from exc
        if not isinstance(data, Mapping):
            raise SchemeError("object must be a JSON object")
        kind = data.get("kind")
        if not kind:
            raise SchemeError("Object 'Kind' is missing")
        api_version = data.get("apiVersion")
        if not api_version:
            raise SchemeError("Object 'apiVersion' is missing")
        return self.lookup(api_version, kind).from_dict(data)