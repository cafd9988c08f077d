"""Feature flag tenant editor: add or remove tenants on a remote feature flag."""

__version__ = "0.1.0"
