"""Route group exports."""

from . import attendance, geofence, health, location

__all__ = ["attendance", "geofence", "health", "location"]
