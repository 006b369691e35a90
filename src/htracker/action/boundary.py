# SPDX-License-Identifier: MIT

import functools
import logging
from typing import Any, Callable, ParamSpec

from pydantic import ValidationError

from htracker.model.context import RequestContext
from htracker.model.response import ActionResponse, failure_response, success_response
from htracker.model.tracker import Tracker
from htracker.repository.entry import EntryNotFoundError
from htracker.repository.tracker import TRACKER_REPO, TrackerNotFoundError
from htracker.schema.error import format_validation_error
from htracker.service.entry import EntryValidationError
from htracker.service.tracker import TrackerValidationError

P = ParamSpec("P")

logger = logging.getLogger(__name__)


def action(
    description: str,
) -> Callable[[Callable[P, Any]], Callable[P, ActionResponse]]:
    """
    Turn a function that returns data or raises into an envelope-returning
    action.

    Validation and not-found failures become their messages; anything else
    is logged and reported as "Failed to <description>".
    """

    def decorator(func: Callable[P, Any]) -> Callable[P, ActionResponse]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> ActionResponse:
            try:
                data = func(*args, **kwargs)
            except ValidationError as e:
                message = format_validation_error(e)
                logger.info("%s rejected: %s", description, message)
                return failure_response(message)
            except (EntryValidationError, TrackerValidationError) as e:
                logger.info("%s rejected: %s", description, e)
                return failure_response(str(e))
            except TrackerNotFoundError:
                return failure_response("Tracker not found")
            except EntryNotFoundError:
                return failure_response("Entry not found")
            except Exception:
                logger.exception("Error trying to %s", description)
                return failure_response(f"Failed to {description}")
            return success_response(data)

        return wrapper

    return decorator


def get_owned_tracker(tracker_id: str, context: RequestContext) -> Tracker:
    """Trackers of other users are reported as missing."""
    tracker = TRACKER_REPO.get_tracker(tracker_id)
    if tracker["user_id"] != context["user_id"]:
        raise TrackerNotFoundError(tracker_id)
    return tracker
