"""Shared helpers for the license expiration services."""

from __future__ import annotations

from datetime import date, timedelta

DATE_PLACEHOLDER = "[date]"
URL_PLACEHOLDER = "[url]"


def long_date(value: date) -> str:
    """Format *value* as a long date, e.g. ``Sunday, October 18, 2026``."""
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def within_warning_window(today: date, expiration: date, days_to_warn: int) -> bool:
    """Whether *today* lies strictly after ``expiration - days_to_warn``.

    A window that starts before the first representable date is always
    open; one that starts after the last is never open.
    """
    if days_to_warn > (expiration - date.min).days:
        return True
    if -days_to_warn > (date.max - expiration).days:
        return False
    return today > expiration - timedelta(days=days_to_warn)


def fill_placeholders(text: str, expiration: date, url: str) -> str:
    """Replace ``[date]`` and ``[url]`` in *text*."""
    return text.replace(DATE_PLACEHOLDER, long_date(expiration)).replace(URL_PLACEHOLDER, url)
