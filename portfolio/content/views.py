# portfolio/content/views.py
from datetime import datetime, timezone
from sqlalchemy import DateTime, String, inspect as sa_inspect
from portfolio.errors import ApiError

LIST_COLUMNS = ('technologies', 'images', 'skills')
BOOLEAN_COLUMNS = ('published', 'current')


def parse_datetime(value, field):
    """Parse ``YYYY-MM-DD`` or ISO-8601 input into a naive UTC datetime."""
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ApiError(f'Invalid date for {field}')
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ApiError(f'Invalid date for {field}')
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _coerce(model, column, key, value):
    if column in LIST_COLUMNS:
        if value is None:
            return []
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ApiError(f'{key} must be a list of strings')
        return value
    if column in BOOLEAN_COLUMNS:
        if not isinstance(value, bool):
            raise ApiError(f'{key} must be true or false')
        return value
    column_type = sa_inspect(model).columns[column].type
    if isinstance(column_type, DateTime):
        return parse_datetime(value, key)
    # Text is a String subclass
    if isinstance(column_type, String) and value is not None and not isinstance(value, str):
        raise ApiError(f'{key} must be a string')
    return value


def apply_payload(row, data, partial=False):
    """Copy camelCase payload fields onto ``row``.

    Unknown keys are ignored. On create (``partial=False``) every required
    field must be present and non-empty.
    """
    model = type(row)
    if not isinstance(data, dict):
        raise ApiError('Request body must be a JSON object')

    missing = [key for key in model.REQUIRED
               if (key in data or not partial) and data.get(key) in (None, '')]
    if missing:
        raise ApiError(f"Missing required fields: {', '.join(missing)}")

    for key, choices in getattr(model, 'CHOICES', {}).items():
        if key in data and data[key] not in choices:
            raise ApiError(f"{key} must be one of: {', '.join(choices)}")

    for key, column in model.FIELDS.items():
        if key in data:
            setattr(row, column, _coerce(model, column, key, data[key]))
    return row


def filter_rows(rows, query=None, **tags):
    """Narrow listed rows by a title search and exact tag filters.

    ``tags`` maps an attribute to the wanted value; list attributes match when
    they contain the value (case-insensitive).
    """
    if query:
        needle = query.lower()
        rows = [row for row in rows if needle in (row.title or '').lower()]
    for attribute, wanted in tags.items():
        if not wanted:
            continue
        wanted = wanted.lower()
        kept = []
        for row in rows:
            value = getattr(row, attribute)
            if isinstance(value, list):
                if any(str(item).lower() == wanted for item in value):
                    kept.append(row)
            elif value is not None and str(value).lower() == wanted:
                kept.append(row)
        rows = kept
    return rows
