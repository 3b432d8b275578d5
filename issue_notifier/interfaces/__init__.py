"""Delivery interfaces of the notification service."""
