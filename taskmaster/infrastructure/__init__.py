"""Infrastructure layer: persistence, realtime delivery, security and email."""
