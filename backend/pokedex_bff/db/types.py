from __future__ import annotations

import json

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator


class JSONList(TypeDecorator):
    """A Python list stored as serialized JSON text."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return "[]"
        return json.dumps(list(value))

    def process_result_value(self, value, dialect):
        if not value:
            return []
        data = json.loads(value)
        return data if isinstance(data, list) else []
