"""Council Portal: civic-engagement backend with data migration tooling."""

__version__ = "1.0.0"
