"""Journaling check-in reply model."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from mentor_recs.taxonomy.path_taxonomy import CheckInTime, MoodRating, TrainingPath


class CheckInReply(BaseModel):
    """The mentor's answer to one check-in entry.

    Attributes:
        user_response: What the user wrote, stripped.
        reply: Mentor reply, prefixed by a mood acknowledgement when a mood
            was given.
        follow_up: Question to keep the user reflecting.
    """

    model_config = ConfigDict(frozen=True)

    path: TrainingPath
    time_of_day: CheckInTime
    mood: Optional[MoodRating] = None
    user_response: str = Field(min_length=1)
    reply: str
    follow_up: str
