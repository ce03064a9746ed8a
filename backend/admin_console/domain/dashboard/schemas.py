from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DashboardStats(BaseModel):
    total_users: int
    total_groups: int
    total_events: int
    total_surveys: int
    active_users: int
    active_events: int
    active_surveys: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActivityItem(BaseModel):
    type: Literal["user", "group", "event", "survey"]
    action: str
    details: str
    time: datetime
    status: Literal["success", "info", "warning", "error"]
