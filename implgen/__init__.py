"""implgen - stub implementation generator for abstract Java types."""

__version__ = "0.1.0"
