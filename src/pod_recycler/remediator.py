"""
Force deletion of a single pod
"""

from typing import Optional

from .errors import RemediationError
from .events import PodRef
from .logger import RecyclerLogger
from .metrics import RecyclerMetrics

FORCE_GRACE_PERIOD_SECONDS = 0


class Remediator:
    """Issues one zero-grace delete per call. No retries: the next MODIFIED
    event for a pod still in CrashLoopBackOff triggers another attempt."""

    def __init__(self, k8s_client, log: Optional[RecyclerLogger] = None,
                 metrics: Optional[RecyclerMetrics] = None, dry_run: bool = False):
        self.k8s_client = k8s_client
        self.log = log or RecyclerLogger()
        self.metrics = metrics or RecyclerMetrics()
        self.dry_run = dry_run

    def remediate(self, ref: PodRef) -> None:
        """Force delete ``ref``; raises RemediationError on any failure"""
        if self.dry_run:
            self.log.log_dry_run(ref.namespace, ref.name)
            return

        try:
            self.k8s_client.delete_pod(
                name=ref.name,
                namespace=ref.namespace,
                grace_period_seconds=FORCE_GRACE_PERIOD_SECONDS
            )
        except Exception as e:
            # 404 and "already terminating" are not special-cased
            self.metrics.remediation_failures.labels(namespace=ref.namespace).inc()
            raise RemediationError(ref.namespace, ref.name, e) from e

        self.metrics.remediations.labels(namespace=ref.namespace).inc()
        self.log.log_pod_deleted(ref.namespace, ref.name)
