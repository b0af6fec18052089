"""
Pod Recycler - Kubernetes CrashLoopBackOff Remediation Controller

Watches pods across all namespaces and force-deletes those stuck in
CrashLoopBackOff, so their owning controller recreates them right away
instead of waiting out the kubelet restart backoff.
"""

__version__ = "1.0.0"
