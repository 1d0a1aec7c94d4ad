"""Single-slot caching proxy for a fixed Plausible stats query."""

__version__ = "0.1.0"
