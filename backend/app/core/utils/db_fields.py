from datetime import timezone
from sqlalchemy.types import TypeDecorator, DateTime


class TZAwareDateTime(TypeDecorator):
    """
    DateTime column that always stores and returns UTC-aware values.

    Naive datetimes are treated as UTC on the way in. Backends without
    native timezone support (sqlite) hand back naive values, which get
    UTC attached on the way out.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None

        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)

        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return None

        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
