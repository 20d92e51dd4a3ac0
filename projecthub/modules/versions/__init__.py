"""Version domain package exports."""

from .models import Version

__all__ = ["Version"]
