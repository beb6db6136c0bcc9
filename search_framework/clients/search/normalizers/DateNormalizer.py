from datetime import date, datetime
from typing import Any

import pytz

from search_framework.clients.search.normalizers.NormalizerInterface import NormalizerInterface

DEFAULT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class DateNormalizer(NormalizerInterface):
    """Formats dates in UTC.

    Accepts unix timestamps (int or digit strings), ISO-8601 strings and
    date/datetime objects. Naive datetimes are taken as UTC. Values that cannot
    be parsed, and empty values, are returned unchanged. Lists are normalized
    element by element.
    """

    def __init__(self, date_format: str = DEFAULT_DATE_FORMAT):
        self._format = date_format

    def set_date_format(self, date_format: str) -> "DateNormalizer":
        self._format = date_format
        return self

    def get_date_format(self) -> str:
        return self._format

    def normalize(self, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [self.normalize(v) for v in value]
        if not value or isinstance(value, bool):
            return value

        parsed = self._parse(value)
        if parsed is None:
            return value
        return parsed.strftime(self._format)

    def _parse(self, value: Any) -> datetime | None:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime(value.year, value.month, value.day)
        elif isinstance(value, int) or (isinstance(value, str) and value.strip().isdigit()):
            try:
                return datetime.fromtimestamp(int(value), tz=pytz.utc)
            except (ValueError, OverflowError, OSError):
                # long numeric ids such as ISBNs are not timestamps
                return None
        elif isinstance(value, str):
            try:
                parsed = datetime.fromisoformat(value.strip())
            except ValueError:
                return None
        else:
            return None

        if parsed.tzinfo is None:
            return pytz.utc.localize(parsed)
        return parsed.astimezone(pytz.utc)
