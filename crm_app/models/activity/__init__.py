# crm_app/models/activity/__init__.py
"""
Activity models package
"""

from .enums import ActivityType
from .models import Activity, ActivityParticipant

__all__ = ["Activity", "ActivityParticipant", "ActivityType"]
