# SPDX-License-Identifier: MIT

import datetime
from typing import Optional

from pydantic import Field, model_validator

from htracker.schema.tracker import StrictModel
from htracker.time import now_utc, python_to_pendulum_utc


class EntryInput(StrictModel):
    tracker_id: str = Field(min_length=1)
    start_time: Optional[datetime.datetime] = None
    end_time: Optional[datetime.datetime] = None
    value: Optional[float] = None
    note: Optional[str] = Field(default=None, max_length=500)
    tags: list[str] = Field(default_factory=list)
    date: datetime.datetime = Field(default_factory=now_utc)

    @model_validator(mode="after")
    def check_session_order(self) -> "EntryInput":
        if (
            self.start_time is not None
            and self.end_time is not None
            and python_to_pendulum_utc(self.end_time)
            < python_to_pendulum_utc(self.start_time)
        ):
            raise ValueError("End time cannot be before start time")
        return self


class EntryUpdate(StrictModel):
    """Partial entry update. Fields explicitly set to None are cleared."""

    tracker_id: Optional[str] = Field(default=None, min_length=1)
    start_time: Optional[datetime.datetime] = None
    end_time: Optional[datetime.datetime] = None
    value: Optional[float] = None
    note: Optional[str] = Field(default=None, max_length=500)
    tags: Optional[list[str]] = None
    date: Optional[datetime.datetime] = None
