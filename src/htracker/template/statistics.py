# SPDX-License-Identifier: MIT

from typing import Optional

from htracker.model.tracker import Statistics


def get_statistics_template(total_custom: Optional[str] = None) -> Statistics:
    return {
        "total_entries": 0,
        "total_time": 0,
        "total_value": 0.0,
        "total_custom": total_custom,
    }
