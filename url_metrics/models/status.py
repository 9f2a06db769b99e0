"""Status summary data structures shared by every presentation surface."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class IndicatorState(str, Enum):
    EMPTY = "empty"
    POPULATED = "populated"
    COMPLETE = "complete"


class ViewportStatus(BaseModel):
    min_width: int
    max_width: Optional[int] = None  # None for the unbounded group
    device_label: str
    state: IndicatorState
    complete: bool = False
    count: int = 0
    sample_size: int = 0
    last_modified: Optional[str] = None  # e.g. "5 mins ago"
    tooltip: str = ""
    css_classes: list[str] = Field(default_factory=list)


class CollectionStatus(BaseModel):
    message: str
    tooltip: str = ""
    edit_link: Optional[str] = None
    every_group_complete: bool = False
    every_group_populated: bool = False
    any_group_populated: bool = False
    common_element: Optional[str] = None
    viewport_statuses: list[ViewportStatus] = Field(default_factory=list)
