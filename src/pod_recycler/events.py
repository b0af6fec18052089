"""
Typed view of pod watch events.

The kubernetes client yields plain dicts of the form
``{"type": "MODIFIED", "object": V1Pod, "raw_object": {...}}``.  ``decode_event``
turns one of those into a ``WatchEvent`` whose payload is either a
``PodSnapshot`` or an ``UnrecognizedPayload``; it never raises.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Union


class EventType(str, Enum):
    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"
    ERROR = "ERROR"
    BOOKMARK = "BOOKMARK"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: Any) -> "EventType":
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.UNKNOWN


class ContainerState(str, Enum):
    WAITING = "waiting"
    RUNNING = "running"
    TERMINATED = "terminated"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PodRef:
    """Identity of a pod, the only input a remediation needs"""
    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass(frozen=True)
class ContainerStatusRecord:
    name: str
    state: ContainerState
    reason: Optional[str] = None

    def is_waiting_with(self, reason: str) -> bool:
        return self.state is ContainerState.WAITING and self.reason == reason


@dataclass(frozen=True)
class PodSnapshot:
    ref: PodRef
    deletion_timestamp: Optional[datetime] = None
    container_statuses: Tuple[ContainerStatusRecord, ...] = ()

    @property
    def is_terminating(self) -> bool:
        return self.deletion_timestamp is not None


@dataclass(frozen=True)
class UnrecognizedPayload:
    """Event payload that could not be read as a pod"""
    detail: str


@dataclass(frozen=True)
class WatchEvent:
    type: EventType
    payload: Union[PodSnapshot, UnrecognizedPayload]

    @property
    def pod(self) -> Optional[PodSnapshot]:
        return self.payload if isinstance(self.payload, PodSnapshot) else None


def _container_record(status: Any) -> ContainerStatusRecord:
    state = getattr(status, "state", None)
    name = getattr(status, "name", None) or ""
    if state is None:
        return ContainerStatusRecord(name=name, state=ContainerState.UNKNOWN)

    waiting = getattr(state, "waiting", None)
    if waiting is not None:
        return ContainerStatusRecord(
            name=name,
            state=ContainerState.WAITING,
            reason=getattr(waiting, "reason", None),
        )
    if getattr(state, "running", None) is not None:
        return ContainerStatusRecord(name=name, state=ContainerState.RUNNING)
    if getattr(state, "terminated", None) is not None:
        return ContainerStatusRecord(name=name, state=ContainerState.TERMINATED)
    return ContainerStatusRecord(name=name, state=ContainerState.UNKNOWN)


def snapshot_from_pod(pod: Any) -> PodSnapshot:
    """Build a PodSnapshot from a V1Pod (or anything shaped like one).

    Raises ``AttributeError``/``TypeError`` when the object lacks the
    metadata a pod must carry.
    """
    metadata = pod.metadata
    namespace, name = metadata.namespace, metadata.name
    if not isinstance(namespace, str) or not isinstance(name, str):
        raise TypeError("pod metadata is missing namespace or name")

    status = getattr(pod, "status", None)
    statuses = getattr(status, "container_statuses", None) or []
    return PodSnapshot(
        ref=PodRef(namespace=namespace, name=name),
        deletion_timestamp=getattr(metadata, "deletion_timestamp", None),
        container_statuses=tuple(_container_record(s) for s in statuses),
    )


def _describe(obj: Any) -> str:
    if isinstance(obj, Mapping):
        # ERROR events carry a raw v1.Status dict
        message = obj.get("message") or obj.get("reason")
        if message:
            return f"{obj.get('kind', 'object')} {obj.get('code', '')}: {message}".strip()
        return f"{obj.get('kind', 'dict')} payload"
    return f"{type(obj).__name__} payload"


def decode_event(raw: Any) -> WatchEvent:
    """Decode one raw watch event, never raising"""
    if not isinstance(raw, Mapping):
        return WatchEvent(EventType.UNKNOWN, UnrecognizedPayload(_describe(raw)))

    event_type = EventType.parse(raw.get("type"))
    obj = raw.get("object")
    if obj is None or isinstance(obj, Mapping):
        return WatchEvent(event_type, UnrecognizedPayload(_describe(obj)))

    try:
        return WatchEvent(event_type, snapshot_from_pod(obj))
    except (AttributeError, TypeError) as e:
        return WatchEvent(event_type, UnrecognizedPayload(f"{_describe(obj)}: {e}"))
