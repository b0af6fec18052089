"""
Decides whether a watch event describes a pod worth force deleting
"""

from dataclasses import dataclass
from typing import Union

from .config import CRASH_LOOP_REASON
from .events import EventType, PodSnapshot, UnrecognizedPayload, WatchEvent


@dataclass(frozen=True)
class NotEligible:
    reason: str


@dataclass(frozen=True)
class Eligible:
    pod: PodSnapshot


Classification = Union[NotEligible, Eligible]


def is_in_crash_loop_backoff(pod: PodSnapshot, reason: str = CRASH_LOOP_REASON) -> bool:
    """True if any container is waiting with the given reason"""
    return any(status.is_waiting_with(reason) for status in pod.container_statuses)


def classify(event: WatchEvent, reason: str = CRASH_LOOP_REASON) -> Classification:
    """Classify one event.

    Only MODIFIED events for pods that are not already terminating and have
    at least one container in CrashLoopBackOff are eligible.  Each event is
    judged on its own snapshot.
    """
    if isinstance(event.payload, UnrecognizedPayload):
        return NotEligible("unrecognized payload")

    pod = event.payload
    if event.type is not EventType.MODIFIED:
        return NotEligible(f"event type {event.type.value}")

    # A pod already being torn down must never be targeted again
    if pod.is_terminating:
        return NotEligible("pod is terminating")

    if is_in_crash_loop_backoff(pod, reason):
        return Eligible(pod)
    return NotEligible(f"no container waiting with {reason}")
