"""Tests for the force delete action"""

import pytest
from kubernetes.client.rest import ApiException

from pod_recycler.errors import RemediationError
from pod_recycler.events import PodRef
from pod_recycler.remediator import Remediator

from conftest import ScriptedClient


def test_remediate_deletes_with_zero_grace(log, metrics):
    k8s = ScriptedClient()
    remediator = Remediator(k8s, log=log, metrics=metrics)

    remediator.remediate(PodRef("ns", "app-1"))

    assert k8s.deleted == [("ns", "app-1", 0)]
    log.log_pod_deleted.assert_called_once_with("ns", "app-1")
    assert metrics.value("pod_recycler_remediations_total", {"namespace": "ns"}) == 1


def test_remediate_wraps_api_errors(log, metrics):
    not_found = ApiException(status=404, reason="Not Found")
    k8s = ScriptedClient(delete_errors=[not_found])
    remediator = Remediator(k8s, log=log, metrics=metrics)

    with pytest.raises(RemediationError) as exc_info:
        remediator.remediate(PodRef("ns", "gone"))

    err = exc_info.value
    assert (err.namespace, err.name) == ("ns", "gone")
    assert err.cause is not_found
    assert err.__cause__ is not_found
    log.log_pod_deleted.assert_not_called()
    assert metrics.value("pod_recycler_remediation_failures_total", {"namespace": "ns"}) == 1
    assert metrics.value("pod_recycler_remediations_total", {"namespace": "ns"}) == 0


def test_remediate_does_not_retry(log, metrics):
    k8s = ScriptedClient(delete_errors=[ConnectionResetError("reset by peer")])
    remediator = Remediator(k8s, log=log, metrics=metrics)

    with pytest.raises(RemediationError):
        remediator.remediate(PodRef("ns", "app-1"))

    assert len(k8s.deleted) == 1


def test_dry_run_skips_api_call(log, metrics):
    k8s = ScriptedClient()
    remediator = Remediator(k8s, log=log, metrics=metrics, dry_run=True)

    remediator.remediate(PodRef("ns", "app-1"))

    assert k8s.deleted == []
    log.log_dry_run.assert_called_once_with("ns", "app-1")
