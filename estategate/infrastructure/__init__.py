"""Infrastructure layer: persistence, security, email and realtime delivery."""
