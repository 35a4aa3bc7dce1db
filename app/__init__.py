"""
Watch Party API - synchronized playback sessions over WebSocket and HTTP.
"""

__version__ = "1.0.0"
