"""Prometheus exporter for JupyterHub user activity."""

__version__ = "0.1.0"
