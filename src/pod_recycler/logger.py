"""
Logging configuration for Pod Recycler
"""

import logging
import sys
from typing import Any, Dict, Optional
import structlog
from colorama import init as colorama_init

from .config import Config

# Initialize colorama for cross-platform colored output
colorama_init()


def setup_logging(cfg: Optional[Config] = None) -> None:
    """Setup structured logging for the application"""
    cfg = cfg or Config()

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if cfg.log_format == "json"
            else structlog.dev.ConsoleRenderer(colors=True)
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, cfg.log_level.upper()),
    )

    # Suppress verbose kubernetes client logs
    logging.getLogger("kubernetes").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)


class RecyclerLogger:
    """Specialized logger for Pod Recycler operations"""

    def __init__(self, name: str = "pod-recycler"):
        self.logger = get_logger(name)

    def log_startup(self, config_dict: Dict[str, Any]) -> None:
        """Log application startup"""
        self.logger.info(
            "Pod Recycler starting up",
            version="1.0.0",
            config=config_dict
        )

    def log_watch_started(self, attempt: int) -> None:
        self.logger.info("Starting watch on pods in all namespaces", attempt=attempt)

    def log_watch_failed(self, error: Exception, retry_in: float) -> None:
        """Log a failure to open or read the watch stream"""
        self.logger.error(
            "Failed to watch pods",
            error=str(error),
            error_type=type(error).__name__,
            retry_in_seconds=retry_in
        )

    def log_stream_closed(self, events_seen: int, retry_in: float) -> None:
        self.logger.warning(
            "Watch connection closed, reconnecting",
            events_seen=events_seen,
            retry_in_seconds=retry_in
        )

    def log_error_event(self, detail: str) -> None:
        """Log an ERROR event sent by the API server"""
        self.logger.warning("Watch stream reported an error", detail=detail)

    def log_unrecognized_payload(self, event_type: str, detail: str) -> None:
        self.logger.debug(
            "Skipping event with unrecognized payload",
            event_type=event_type,
            detail=detail
        )

    def log_crash_loop_detected(self, namespace: str, pod_name: str) -> None:
        self.logger.info(
            "Detected CrashLoopBackOff, force deleting",
            namespace=namespace,
            pod_name=pod_name
        )

    def log_pod_deleted(self, namespace: str, pod_name: str) -> None:
        """Log when a pod is force deleted"""
        self.logger.info(
            "Successfully deleted pod",
            namespace=namespace,
            pod_name=pod_name,
            grace_period_seconds=0
        )

    def log_dry_run(self, namespace: str, pod_name: str) -> None:
        self.logger.info(
            "Dry run - would force delete pod",
            namespace=namespace,
            pod_name=pod_name
        )

    def log_delete_failed(self, namespace: str, pod_name: str, error: Exception) -> None:
        """Log a failed remediation with the offending pod's identity"""
        self.logger.error(
            "Failed to delete pod",
            namespace=namespace,
            pod_name=pod_name,
            error=str(error),
            error_type=type(error).__name__
        )

    def log_shutdown(self) -> None:
        self.logger.info("Stop requested, leaving watch loop")

    def log_error(self, error: Exception, context: str = None) -> None:
        """Log errors with context"""
        self.logger.error(
            "Error occurred",
            error=str(error),
            error_type=type(error).__name__,
            context=context,
            exc_info=True
        )
