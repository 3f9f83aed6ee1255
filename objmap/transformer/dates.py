"""Date/time transformer."""
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from objmap.transformer.base import Transformer


class DateTimeTransformer(Transformer):
    """
    Converts between datetime values and strings

    datetime and date values are formatted with ``output_format`` (ISO 8601
    when omitted); strings are parsed with ``input_format`` (ISO 8601 when
    omitted); numbers are read as POSIX timestamps. Unparsable strings raise
    ValueError.
    """

    def __init__(
        self,
        output_format: Optional[str] = None,
        input_format: Optional[str] = None,
        tz: Optional[timezone] = None,
    ):
        self.output_format = output_format
        self.input_format = input_format
        self.tz = tz

    def transform(self, value: Any, source_data: Optional[Dict[str, Any]] = None) -> Any:
        if value is None:
            return None

        if isinstance(value, (datetime, date)):
            if isinstance(value, datetime) and self.tz is not None:
                value = value.astimezone(self.tz)
            if self.output_format:
                return value.strftime(self.output_format)
            return value.isoformat()

        if isinstance(value, str):
            if self.input_format:
                parsed = datetime.strptime(value, self.input_format)
            else:
                parsed = datetime.fromisoformat(value)
            if self.tz is not None:
                parsed = parsed.replace(tzinfo=self.tz) if parsed.tzinfo is None else parsed.astimezone(self.tz)
            return parsed

        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value, tz=self.tz or timezone.utc)

        return value
