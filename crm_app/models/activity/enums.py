# crm_app/models/activity/enums.py
"""
Enums for activity models.
"""

from enum import Enum as PyEnum


class ActivityType(PyEnum):
    """How an activity took place"""

    PHONE_CALL = "phone_call"
    VIDEO_CALL = "video_call"
    TEXT_MESSAGE = "text_message"
    IN_PERSON = "in_person"
    EMAIL = "email"
    SOCIAL_MEDIA = "social_media"
    OTHER = "other"
