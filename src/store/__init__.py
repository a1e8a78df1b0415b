"""Report history and SDK layer.

This package persists report metadata and exposes the client that
drives load, aggregate, and report workflows.
"""
