"""Issue status and verification notification service."""
