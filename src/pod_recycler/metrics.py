"""
Prometheus metrics for Pod Recycler
"""

import logging
from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Gauge, start_http_server

logger = logging.getLogger(__name__)


class RecyclerMetrics:
    """Counters describing the watch loop and remediations.

    Each instance owns its registry so several can coexist (tests, embedding).
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()

        self.watch_attempts = Counter(
            'pod_recycler_watch_attempts_total',
            'Number of pod watch attempts',
            registry=self.registry
        )
        self.watch_failures = Counter(
            'pod_recycler_watch_failures_total',
            'Number of failures opening or reading the pod watch stream',
            registry=self.registry
        )
        self.events = Counter(
            'pod_recycler_events_total',
            'Pod watch events received',
            ['type'],
            registry=self.registry
        )
        self.remediations = Counter(
            'pod_recycler_remediations_total',
            'Pods force deleted because of CrashLoopBackOff',
            ['namespace'],
            registry=self.registry
        )
        self.remediation_failures = Counter(
            'pod_recycler_remediation_failures_total',
            'Failed force deletes',
            ['namespace'],
            registry=self.registry
        )
        self.streaming = Gauge(
            'pod_recycler_streaming',
            '1 while a pod watch stream is open',
            registry=self.registry
        )

    def value(self, name, labels=None):
        """Current sample value, 0 when never observed"""
        return self.registry.get_sample_value(name, labels or {}) or 0.0

    def serve(self, port: int, addr: str = '0.0.0.0'):
        """Expose the registry over HTTP"""
        start_http_server(port, addr=addr, registry=self.registry)
        logger.info(f"Serving Prometheus metrics on {addr}:{port}")
