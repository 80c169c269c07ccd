"""
Data Module - Converts gateway rows to plain dictionaries and parses
user-submitted dates
"""

from datetime import date, datetime


DATETIME_FORMATS = [
    '%Y-%m-%dT%H:%M:%S.%f',
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%dT%H:%M',
    '%Y-%m-%d',
]


def serialize_value(value):
    """Render a column value as JSON-compatible data"""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def row_to_dict(row, exclude=()):
    """Convert any model instance to a dictionary of its columns"""
    if row is None:
        return None
    return {
        column.name: serialize_value(getattr(row, column.name))
        for column in row.__table__.columns
        if column.name not in exclude
    }


def user_to_dict(user):
    """Convert user model to dictionary, never exposing the password hash"""
    data = row_to_dict(user, exclude=('password_hash',))
    if data is not None and user.profile is not None:
        data['full_name'] = user.profile.full_name or ''
        data['avatar_url'] = user.profile.avatar_url or ''
    return data


def parse_datetime(value):
    """
    Parse a date/datetime string submitted by a form

    Accepts ISO 8601 values (a trailing ``Z`` is treated as UTC) and the
    plain ``YYYY-MM-DD`` form used by date pickers.

    Returns:
        datetime or None when the value is empty or unparseable
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith('Z'):
        text = text[:-1]
    for fmt in DATETIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


__all__ = [
    'serialize_value',
    'row_to_dict',
    'user_to_dict',
    'parse_datetime'
]
