# portfolio/visibility.py
"""Who gets to see unpublished content.

Anonymous readers only ever receive published rows; a request carrying a
valid bearer token sees everything. Every list and get route goes through
these helpers so the rule lives in one place.
"""
from flask_login import current_user


def viewer_is_admin():
    return bool(getattr(current_user, 'is_authenticated', False))


def is_visible(is_admin, row):
    if row is None:
        return False
    if is_admin:
        return True
    return bool(getattr(row, 'published', True))


def visible_query(model, is_admin):
    query = model.query
    if not is_admin and hasattr(model, 'published'):
        query = query.filter(model.published.is_(True))
    return query
