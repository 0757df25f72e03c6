"""Pre-mortem forensic engine with a deterministic admission gate."""

__version__ = "0.1.0"
