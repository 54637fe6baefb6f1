"""Tenant management console: stores, notifications and REST adapters."""

__version__ = "0.1.0"
