"""The EraserConfig resource: manager settings and component containers."""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping
from dataclasses import MISSING, dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any

from .duration import format_duration, parse_duration
from .quantity import Quantity, parse_quantity
from .scheme import V1ALPHA1, Scheme

__all__ = [
    "Runtime", "RepoTag", "ResourceRequirements", "ContainerConfig",
    "OptionalContainerConfig", "ScheduleConfig", "ProfileConfig",
    "ImageJobCleanupConfig", "ImageJobConfig", "NodeFilterConfig",
    "ManagerConfig", "Components", "EraserConfig", "parse_runtime", "add_to_scheme",
]

_KIND = "EraserConfig"


class Runtime(str, Enum):
    """A container runtime the eraser knows how to talk to."""

    CONTAINERD = "containerd"
    DOCKERSHIM = "dockershim"
    CRIO = "crio"


def parse_runtime(value: str | Runtime) -> Runtime:
    """Return the runtime named by ``value``; raise ValueError if unknown."""
    if isinstance(value, Runtime):
        return value
    if isinstance(value, str) and value in Runtime._value2member_map_:
        return Runtime(value)
    raise ValueError(
        f"cannot determine runtime type: {value}. "
        "valid values are containerd, dockershim, or crio"
    )


def _mapping(data: Any) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object, got {data!r}")
    return data


def _duration_in(value: Any) -> int:
    if value is None:
        return 0
    if not isinstance(value, str):
        raise ValueError(f"duration must be a string, got {value!r}")
    return parse_duration(value)


def _quantity_in(value: Any) -> Quantity:
    if value is None:
        return Quantity()
    if isinstance(value, str):
        return parse_quantity(value.strip())
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return parse_quantity(str(value))
    raise ValueError(f"invalid quantity: {value!r}")


def _runtime_in(value: Any) -> Runtime | None:
    return None if value is None else parse_runtime(value)


def _duration(**kwargs: Any) -> Any:
    return field(default=0, metadata={"decode": _duration_in, "encode": format_duration}, **kwargs)


def _quantity() -> Any:
    return field(default_factory=Quantity, metadata={"decode": _quantity_in})


def _camel(name: str) -> str:
    first, *rest = name.split("_")
    return first + "".join(part.title() for part in rest)


def _encode(obj: Any) -> dict[str, Any]:
    """Serialise a settings dataclass; empty scalars are left out."""
    result: dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        key = _camel(f.name)
        if isinstance(value, Quantity):
            result[key] = str(value)
        elif is_dataclass(value):
            result[key] = _encode(value)
        elif value is None or (value is not f.default and not value) or value == "" or value is False or value == 0 or value == []:
            continue
        elif "encode" in f.metadata:
            result[key] = f.metadata["encode"](value)
        elif isinstance(value, Enum):
            result[key] = value.value
        else:
            result[key] = list(value) if isinstance(value, list) else value
    return result


def _decode(cls: type, data: Any) -> Any:
    """Build a settings dataclass from a mapping of camelCase keys."""
    data = _mapping(data)
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        raw = data.get(_camel(f.name))
        default = f.default
        if "decode" in f.metadata:
            value = f.metadata["decode"](raw)
        elif f.default_factory is list:
            value = list(raw or [])
        elif f.default_factory is not MISSING:
            value = _decode(f.default_factory, raw)
        elif isinstance(default, bool):
            value = bool(raw)
        elif isinstance(default, int):
            value = int(raw or 0)
        elif isinstance(default, float):
            value = float(raw or 0.0)
        elif isinstance(default, str):
            value = raw or ""
        else:
            value = raw
        kwargs[f.name] = value
    return cls(**kwargs)


@dataclass
class RepoTag:
    """An image repository and tag."""

    repo: str = ""
    tag: str = ""


@dataclass
class ResourceRequirements:
    """Memory and CPU amounts for a container."""

    mem: Quantity = _quantity()
    cpu: Quantity = _quantity()


@dataclass
class ContainerConfig:
    """Image, resources and optional configuration text of a container."""

    image: RepoTag = field(default_factory=RepoTag)
    request: ResourceRequirements = field(default_factory=ResourceRequirements)
    limit: ResourceRequirements = field(default_factory=ResourceRequirements)
    config: str | None = None


@dataclass
class OptionalContainerConfig(ContainerConfig):
    """A container that can be switched on or off."""

    enabled: bool = False


@dataclass
class ScheduleConfig:
    """How often image removal runs; intervals are in nanoseconds."""

    repeat_interval: int = _duration()
    begin_immediately: bool = False


@dataclass
class ProfileConfig:
    """Whether the profiling endpoint is served, and on which port."""

    enabled: bool = False
    port: int = 0


@dataclass
class ImageJobCleanupConfig:
    """Delays, in nanoseconds, before finished jobs are deleted."""

    delay_on_success: int = _duration()
    delay_on_failure: int = _duration()


@dataclass
class ImageJobConfig:
    """Success threshold and cleanup behaviour of image jobs."""

    success_ratio: float = 0.0
    cleanup: ImageJobCleanupConfig = field(default_factory=ImageJobCleanupConfig)


@dataclass
class NodeFilterConfig:
    """Which nodes are included or excluded by label selectors."""

    type: str = ""
    selectors: list[str] = field(default_factory=list)


@dataclass
class ManagerConfig:
    """Settings of the controller manager."""

    runtime: Runtime | None = field(default=None, metadata={"decode": _runtime_in})
    otlp_endpoint: str = ""
    log_level: str = ""
    scheduling: ScheduleConfig = field(default_factory=ScheduleConfig)
    profile: ProfileConfig = field(default_factory=ProfileConfig)
    image_job: ImageJobConfig = field(default_factory=ImageJobConfig)
    pull_secrets: list[str] = field(default_factory=list)
    node_filter: NodeFilterConfig = field(default_factory=NodeFilterConfig)
    priority_class_name: str = ""


@dataclass
class Components:
    """The collector, scanner and eraser containers."""

    collector: OptionalContainerConfig = field(default_factory=OptionalContainerConfig)
    scanner: OptionalContainerConfig = field(default_factory=OptionalContainerConfig)
    eraser: ContainerConfig = field(default_factory=ContainerConfig)


_OWN_KEYS = frozenset({"apiVersion", "kind", "manager", "components"})


@dataclass
class EraserConfig:
    """The complete eraser configuration.

    Other top-level keys are controller-manager settings, kept as given in
    ``controller_manager``.
    """

    manager: ManagerConfig = field(default_factory=ManagerConfig)
    components: Components = field(default_factory=Components)
    controller_manager: dict[str, Any] = field(default_factory=dict)
    api_version: str = V1ALPHA1.api_version
    kind: str = _KIND

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.api_version:
            result["apiVersion"] = self.api_version
        if self.kind:
            result["kind"] = self.kind
        result.update(copy.deepcopy(self.controller_manager))
        result["manager"] = _encode(self.manager)
        result["components"] = _encode(self.components)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EraserConfig:
        data = _mapping(data)
        kind = data.get("kind") or _KIND
        if kind != _KIND:
            raise ValueError(f"expected kind {_KIND!r}, got {kind!r}")
        return cls(
            manager=_decode(ManagerConfig, data.get("manager")),
            components=_decode(Components, data.get("components")),
            controller_manager={
                key: copy.deepcopy(value) for key, value in data.items() if key not in _OWN_KEYS
            },
            api_version=data.get("apiVersion") or V1ALPHA1.api_version,
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> EraserConfig:
        """Parse a JSON document; raise ValueError on malformed input."""
        return cls.from_dict(json.loads(text))


def add_to_scheme(scheme: Scheme) -> None:
    """Register the EraserConfig kind."""
    scheme.register(V1ALPHA1, _KIND, EraserConfig)