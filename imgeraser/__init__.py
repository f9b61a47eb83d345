"""Resource types, scheme registry, durations, quantities and configuration for a cluster image-cleanup controller."""

__version__ = "1.1.0b0"