"""
Configuration management for Pod Recycler
"""

import os
from typing import Optional
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

CRASH_LOOP_REASON = "CrashLoopBackOff"
DEFAULT_RECONNECT_DELAY_SECONDS = 5.0


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() == "true"


@dataclass
class Config:
    """Configuration class for Pod Recycler"""

    # Kubernetes configuration (None means in-cluster service account)
    kube_config_path: Optional[str] = None

    # Watch loop
    reconnect_delay_seconds: float = DEFAULT_RECONNECT_DELAY_SECONDS

    # Remediation
    dry_run: bool = False

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"

    # Metrics endpoint, disabled when unset
    metrics_port: Optional[int] = None

    def __post_init__(self):
        """Override defaults with environment variables if present"""
        self.kube_config_path = os.getenv("KUBECONFIG", self.kube_config_path) or None
        self.reconnect_delay_seconds = float(
            os.getenv("RECONNECT_DELAY_SECONDS", self.reconnect_delay_seconds)
        )
        self.dry_run = _env_flag("DRY_RUN", self.dry_run)
        self.log_level = os.getenv("LOG_LEVEL", self.log_level)
        self.log_format = os.getenv("LOG_FORMAT", self.log_format)

        metrics_port_env = os.getenv("METRICS_PORT")
        if metrics_port_env:
            self.metrics_port = int(metrics_port_env)

        if self.reconnect_delay_seconds < 0:
            raise ValueError("RECONNECT_DELAY_SECONDS must not be negative")

    def as_dict(self):
        """Loggable view of the configuration"""
        return {
            "kube_config_path": self.kube_config_path,
            "reconnect_delay_seconds": self.reconnect_delay_seconds,
            "dry_run": self.dry_run,
            "log_level": self.log_level,
            "log_format": self.log_format,
            "metrics_port": self.metrics_port,
        }

