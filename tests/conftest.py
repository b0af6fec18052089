"""
Shared fixtures: real kubernetes model objects and a scripted cluster client
"""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
from kubernetes import client

from pod_recycler.logger import RecyclerLogger
from pod_recycler.metrics import RecyclerMetrics


def make_container_status(name="app", waiting_reason=None, running=False, terminated=False):
    if waiting_reason is not None:
        state = client.V1ContainerState(
            waiting=client.V1ContainerStateWaiting(reason=waiting_reason)
        )
    elif running:
        state = client.V1ContainerState(running=client.V1ContainerStateRunning())
    elif terminated:
        state = client.V1ContainerState(
            terminated=client.V1ContainerStateTerminated(exit_code=1)
        )
    else:
        state = None
    return client.V1ContainerStatus(
        name=name,
        image="registry.local/app:1.0",
        image_id="",
        ready=False,
        restart_count=4,
        state=state,
    )


def make_pod(namespace="ns", name="app-1", statuses=None, deleting=False):
    metadata = client.V1ObjectMeta(
        namespace=namespace,
        name=name,
        deletion_timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc) if deleting else None,
    )
    return client.V1Pod(
        metadata=metadata,
        status=client.V1PodStatus(container_statuses=statuses),
    )


def make_event(event_type, obj):
    return {"type": event_type, "object": obj}


def crash_loop_pod(namespace="ns", name="app-1", deleting=False):
    return make_pod(
        namespace,
        name,
        statuses=[make_container_status(waiting_reason="CrashLoopBackOff")],
        deleting=deleting,
    )


class ScriptedClient:
    """Cluster client whose watch calls replay a script.

    Each entry of ``streams`` serves one ``watch_pods`` call: a list of raw
    events, or an exception raised when the watch is opened.
    """

    def __init__(self, streams=None, delete_errors=None):
        self.streams = list(streams or [])
        self.delete_errors = list(delete_errors or [])
        self.watch_calls = 0
        self.deleted = []

    def watch_pods(self):
        self.watch_calls += 1
        entry = self.streams.pop(0) if self.streams else []
        if isinstance(entry, Exception):
            raise entry
        return iter(entry)

    def delete_pod(self, name, namespace, grace_period_seconds=0):
        self.deleted.append((namespace, name, grace_period_seconds))
        if self.delete_errors:
            error = self.delete_errors.pop(0)
            if error is not None:
                raise error


@pytest.fixture
def log():
    return Mock(spec=RecyclerLogger)


@pytest.fixture
def metrics():
    return RecyclerMetrics()
