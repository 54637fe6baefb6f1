"""Use-case layer shared by the stores.

Modules here turn service-layer outcomes into user-facing text without
performing transport I/O or touching UI state directly.
"""
