"""Path insight models used by the daily book insight."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from mentor_recs.taxonomy.path_taxonomy import InsightDepth, TrainingPath


class PathInsight(BaseModel):
    """A short, path-specific piece of wisdom with an accompanying action."""

    model_config = ConfigDict(frozen=True)

    path: TrainingPath
    content: str = Field(min_length=1)
    action_item: str = Field(min_length=1)
    category: str
    depth: InsightDepth = InsightDepth.PRACTICAL


class DailyBookInsight(BaseModel):
    """The insight of the day, attached to the featured book.

    Attributes:
        content: Insight text.
        book_title: Title of the book of the day.
        category: Display name of the focus area.
        action_item: Suggested action for today.
        deep_dive: Reflection question.
        reading_time_minutes: Estimated time to read ``content`` (>= 1).
    """

    model_config = ConfigDict(frozen=True)

    content: str
    book_title: str
    category: str
    action_item: str
    deep_dive: str
    reading_time_minutes: int = Field(ge=1)
