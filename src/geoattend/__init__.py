"""Geofenced attendance check-in service."""
