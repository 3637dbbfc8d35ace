"""
Adapters layer - External event data sources.
"""

from .json_event_source import JsonEventSource

__all__ = ["JsonEventSource"]
