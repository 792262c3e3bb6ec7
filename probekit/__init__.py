"""Health probes for text output, host metrics, HTTP endpoints and native service clients."""

__version__ = "0.1.0"