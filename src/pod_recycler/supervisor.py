"""
The long-running watch loop.

    DISCONNECTED -> CONNECTING -> STREAMING -> DISCONNECTED -> ...

The loop never exits on its own.  Failures to open or read the stream, a
clean close by the API server and ERROR events all lead to the same place:
log, wait ``reconnect_delay`` seconds, reopen.  Only a stop signal passed to
``run`` (or process termination) ends it.
"""

import threading
import time
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from .classifier import Classification, Eligible, classify
from .config import DEFAULT_RECONNECT_DELAY_SECONDS
from .errors import RemediationError
from .events import EventType, UnrecognizedPayload, decode_event
from .logger import RecyclerLogger
from .metrics import RecyclerMetrics
from .remediator import Remediator


class SupervisorState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    STREAMING = "streaming"


class WatchSupervisor:
    def __init__(self, k8s_client, remediator: Remediator,
                 log: Optional[RecyclerLogger] = None,
                 metrics: Optional[RecyclerMetrics] = None,
                 reconnect_delay: float = DEFAULT_RECONNECT_DELAY_SECONDS,
                 sleep: Optional[Callable[[float], Any]] = None):
        self.k8s_client = k8s_client
        self.remediator = remediator
        self.log = log or RecyclerLogger()
        self.metrics = metrics or RecyclerMetrics()
        self.reconnect_delay = reconnect_delay
        self.sleep = sleep
        self.state = SupervisorState.DISCONNECTED
        self.attempts = 0

    def run(self, stop: Optional[threading.Event] = None) -> None:
        """Watch pods until ``stop`` is set; forever if there is none"""
        while not _is_set(stop):
            self.state = SupervisorState.CONNECTING
            self.attempts += 1
            try:
                self.metrics.watch_attempts.inc()
                self.log.log_watch_started(self.attempts)
                stream = self.k8s_client.watch_pods()
                events_seen = self.consume(stream, stop)
            except Exception as e:
                # Transport, auth and API errors alike: retry after the delay
                self.state = SupervisorState.DISCONNECTED
                self.metrics.watch_failures.inc()
                self.log.log_watch_failed(e, self.reconnect_delay)
            else:
                self.state = SupervisorState.DISCONNECTED
                if _is_set(stop):
                    break
                self.log.log_stream_closed(events_seen, self.reconnect_delay)
            finally:
                self.metrics.streaming.set(0)

            if self._wait(stop):
                break

        self.state = SupervisorState.DISCONNECTED
        self.log.log_shutdown()

    def consume(self, stream: Iterable[Any], stop: Optional[threading.Event] = None) -> int:
        """Handle events in delivery order until the stream ends.

        Returns the number of events handled.  An ERROR event ends the
        stream after it is handled.
        """
        events_seen = 0
        iterator = iter(stream)
        try:
            for raw in iterator:
                if self.state is not SupervisorState.STREAMING:
                    self.state = SupervisorState.STREAMING
                    self.metrics.streaming.set(1)
                events_seen += 1
                event_type = self.handle_event(raw)
                if event_type is EventType.ERROR or _is_set(stop):
                    break
        finally:
            close = getattr(iterator, "close", None)
            if close is not None:
                close()
        return events_seen

    def handle_event(self, raw: Any) -> EventType:
        """Classify one raw event and remediate if eligible"""
        event = decode_event(raw)
        self.metrics.events.labels(type=event.type.value).inc()

        if isinstance(event.payload, UnrecognizedPayload):
            if event.type is EventType.ERROR:
                self.log.log_error_event(event.payload.detail)
            else:
                self.log.log_unrecognized_payload(event.type.value, event.payload.detail)

        result: Classification = classify(event)
        if isinstance(result, Eligible):
            ref = result.pod.ref
            self.log.log_crash_loop_detected(ref.namespace, ref.name)
            try:
                self.remediator.remediate(ref)
            except RemediationError as e:
                self.log.log_delete_failed(e.namespace, e.name, e.cause)
        return event.type

    def _wait(self, stop: Optional[threading.Event]) -> bool:
        """Sleep out the reconnect delay; True if a stop was requested"""
        if self.sleep is not None:
            self.sleep(self.reconnect_delay)
            return _is_set(stop)
        if stop is not None:
            return stop.wait(self.reconnect_delay)
        time.sleep(self.reconnect_delay)
        return False


def _is_set(stop: Optional[threading.Event]) -> bool:
    return stop is not None and stop.is_set()
