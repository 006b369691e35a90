# SPDX-License-Identifier: MIT

from typing import Any, NotRequired, TypedDict


class ActionResponse(TypedDict):
    success: bool
    data: NotRequired[Any]
    error: NotRequired[str]


def success_response(data: Any) -> ActionResponse:
    return {"success": True, "data": data}


def failure_response(error: str) -> ActionResponse:
    return {"success": False, "error": error}
