"""HTTP load generator that reports latency, throughput and status codes."""

__version__ = "0.1.0"
__all__ = ["__version__"]