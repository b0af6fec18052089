#!/usr/bin/env python3
"""
Pod Recycler - Main Application
"""

import argparse
import signal
import sys
import threading

from .config import Config
from .errors import ConfigurationError
from .kubernetes_client import KubernetesClient
from .logger import RecyclerLogger, setup_logging
from .metrics import RecyclerMetrics
from .remediator import Remediator
from .supervisor import WatchSupervisor


def build_parser():
    parser = argparse.ArgumentParser(
        prog="pod-recycler",
        description="Force delete pods stuck in CrashLoopBackOff so their controllers recreate them"
    )
    parser.add_argument("--kubeconfig", default=None,
                        help="path to kubeconfig file (default: $KUBECONFIG, else in-cluster)")
    parser.add_argument("--reconnect-delay", type=float, default=None,
                        help="seconds to wait before reopening the pod watch")
    parser.add_argument("--dry-run", action="store_true", default=None,
                        help="log the pods that would be deleted without deleting them")
    parser.add_argument("--metrics-port", type=int, default=None,
                        help="serve Prometheus metrics on this port")
    return parser


def parse_args(argv=None):
    return build_parser().parse_args(argv)


def build_config(args) -> Config:
    """Environment first, then command line flags on top.

    Raises ValueError for unusable values from either source.
    """
    cfg = Config()
    if args.kubeconfig:
        cfg.kube_config_path = args.kubeconfig
    if args.reconnect_delay is not None:
        if args.reconnect_delay < 0:
            raise ValueError("--reconnect-delay must not be negative")
        cfg.reconnect_delay_seconds = args.reconnect_delay
    if args.dry_run:
        cfg.dry_run = True
    if args.metrics_port is not None:
        cfg.metrics_port = args.metrics_port
    return cfg


def install_signal_handlers(stop: threading.Event) -> None:
    """SIGTERM and SIGINT set ``stop`` and interrupt whatever is blocking.

    The watch read has no deadline, so flagging alone would leave an idle
    stream waiting for its next event.
    """
    def _request_stop(signum, frame):
        stop.set()
        raise KeyboardInterrupt

    signal.signal(signal.SIGTERM, _request_stop)
    signal.signal(signal.SIGINT, _request_stop)


def main(argv=None):
    """Main application entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        cfg = build_config(args)
    except ValueError as e:
        parser.error(str(e))

    setup_logging(cfg)
    log = RecyclerLogger()
    log.log_startup(cfg.as_dict())

    try:
        k8s_client = KubernetesClient(kube_config_path=cfg.kube_config_path)
    except ConfigurationError as e:
        log.log_error(e, context="Failed to build Kubernetes config")
        return 1

    metrics = RecyclerMetrics()
    if cfg.metrics_port:
        metrics.serve(cfg.metrics_port)

    remediator = Remediator(k8s_client, log=log, metrics=metrics, dry_run=cfg.dry_run)
    supervisor = WatchSupervisor(
        k8s_client,
        remediator,
        log=log,
        metrics=metrics,
        reconnect_delay=cfg.reconnect_delay_seconds
    )

    stop = threading.Event()
    install_signal_handlers(stop)
    try:
        supervisor.run(stop)
    except KeyboardInterrupt:
        log.log_shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
