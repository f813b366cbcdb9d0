"""
Helpers for the free-text filters used by the list views.
"""

from sqlalchemy import String, cast, func


def normalize_filter(filter_text: str) -> str:
    """Trim and lower-case user filter text; None is treated as empty."""
    return (filter_text or "").strip().lower()


def starts_with_ignore_case(column, prefix: str):
    """
    Case-insensitive "starts with" condition on any column.

    The column is cast to text so numeric columns can be matched too. `prefix`
    must already be normalized; LIKE wildcards in it are matched literally.
    An empty prefix matches every row.
    """
    return func.lower(cast(column, String), type_=String).startswith(prefix, autoescape=True)
