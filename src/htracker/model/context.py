# SPDX-License-Identifier: MIT

from typing import TypedDict

from htracker.model.entity import EntityId


class RequestContext(TypedDict):
    user_id: EntityId
