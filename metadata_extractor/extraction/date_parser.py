import re
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional, Union


@dataclass(frozen=True)
class InvalidDate:
    """A date text that was present but could not be parsed."""
    source: str


class DateParser:
    ISO_ZULU_PATTERN = re.compile(r'Z$', re.IGNORECASE)

    DATETIME_FORMATS = [
        "%Y-%m-%dT%H:%M:%SZ",
        "%Y-%m-%dT%H:%M:%S.%fZ",
        "%Y-%m-%d %H:%M:%S",
        "%Y-%m-%d",
        "%Y/%m/%d",
        "%m/%d/%Y",
        "%Y-%m",
        "%Y",
        "%B %d, %Y",
        "%b %d, %Y",
        "%d %B %Y",
        "%d %b %Y",
    ]

    @classmethod
    def parse(cls, value: Optional[str]) -> Union[datetime, InvalidDate, None]:
        if value is None:
            return None

        value_stripped = value.strip()

        parsed = cls._parse_iso(value_stripped)
        if parsed is None:
            parsed = cls._parse_formats(value_stripped)
        if parsed is None:
            parsed = cls._parse_rfc2822(value_stripped)

        if parsed is None:
            return InvalidDate(value)

        # BSON dates carry no zone, store everything as naive UTC
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)

        return parsed

    @classmethod
    def _parse_iso(cls, value: str) -> Optional[datetime]:
        try:
            return datetime.fromisoformat(cls.ISO_ZULU_PATTERN.sub('+00:00', value))
        except ValueError:
            return None

    @classmethod
    def _parse_formats(cls, value: str) -> Optional[datetime]:
        for fmt in cls.DATETIME_FORMATS:
            try:
                return datetime.strptime(value, fmt)
            except ValueError:
                continue
        return None

    @classmethod
    def _parse_rfc2822(cls, value: str) -> Optional[datetime]:
        try:
            return parsedate_to_datetime(value)
        except (TypeError, ValueError, IndexError):
            return None


def parse_date(value: Optional[str]) -> Union[datetime, InvalidDate, None]:
    """Absent text gives None, unparsable text gives InvalidDate."""
    return DateParser.parse(value)
