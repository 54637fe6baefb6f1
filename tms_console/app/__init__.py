"""Application composition layer.

The controller here turns settings into concrete backend ports without
placing business logic in views or stores.
"""
