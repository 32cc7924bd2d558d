"""WebSocket broadcast hub."""
