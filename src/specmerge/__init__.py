"""specmerge: per-domain specification documents with a delta merge engine."""

__version__ = "0.1.0"
