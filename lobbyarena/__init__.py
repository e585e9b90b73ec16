"""WebSocket lobby server that relays game state between players in a room."""

__version__ = "0.1.0"