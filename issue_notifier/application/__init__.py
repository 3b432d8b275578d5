"""Application layer for the notification service."""
