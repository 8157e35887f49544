"""Client SDK core: schema-driven service models and work request waiters."""

__version__ = "0.1.0"
