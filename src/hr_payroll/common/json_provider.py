from __future__ import annotations

import dataclasses
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any

from flask.json.provider import DefaultJSONProvider


def _api_default(o: Any) -> Any:
    # date covers datetime too; ISO strings instead of Flask's RFC 822 dates
    if isinstance(o, (date, time)):
        return o.isoformat()
    if isinstance(o, timedelta):
        # mysql-connector hands TIME columns back as timedelta
        total = int(o.total_seconds())
        return f"{total // 3600:02d}:{(total % 3600) // 60:02d}:{total % 60:02d}"
    if isinstance(o, Decimal):
        return float(o)
    if isinstance(o, Enum):
        return o.value
    if dataclasses.is_dataclass(o) and not isinstance(o, type):
        return dataclasses.asdict(o)
    return DefaultJSONProvider.default(o)


class ApiJSONProvider(DefaultJSONProvider):
    """JSON provider with ISO dates and DECIMAL columns as numbers."""

    default = staticmethod(_api_default)
    sort_keys = False
