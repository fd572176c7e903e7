"""Marker-based field extraction from storefront HTML.

Every function here is pure: no I/O, no exceptions for missing or malformed
markup. Absent values come back as ``None`` (or an empty list for the
changelog); deciding whether that is an error is up to the caller.
"""

from __future__ import annotations

import re
from typing import Iterable

from bs4 import BeautifulSoup

from .models import PageField, PageInfo
from .tags import FIELD_RULES, ExtractionRule

_LINE_BREAK_RE = re.compile(r"<br\s*/?>|\r?\n", re.IGNORECASE)


def clean_fragment(fragment: str) -> str:
    """Drop inner tags, decode entities and collapse whitespace."""

    if "<" in fragment or "&" in fragment:
        fragment = BeautifulSoup(fragment, "html.parser").get_text()
    return " ".join(fragment.split())


def _find_between(
    html: str, rule: ExtractionRule, start: int = 0
) -> tuple[str, int] | None:
    """Return (raw value, end offset) for the next match at or after ``start``."""

    marker_at = html.find(rule.marker, start)
    if marker_at < 0:
        return None
    open_at = html.find(rule.open_delim, marker_at + len(rule.marker))
    if open_at < 0:
        return None
    value_start = open_at + len(rule.open_delim)
    close_at = html.find(rule.close_delim, value_start)
    if close_at < 0:
        return None
    return html[value_start:close_at], close_at + len(rule.close_delim)


def extract_raw(html: str, rule: ExtractionRule) -> list[str]:
    """Raw (uncleaned) text for the first match, or for every match if repeated."""

    out: list[str] = []
    pos = 0
    while True:
        found = _find_between(html, rule, pos)
        if found is None:
            break
        raw, pos = found
        out.append(raw)
        if not rule.repeated:
            break
    return out


def extract_field(html: str, rule: ExtractionRule) -> str | None:
    found = _find_between(html, rule)
    if found is None:
        return None
    return clean_fragment(found[0]) or None


def split_changelog(region: str) -> list[str]:
    entries = (clean_fragment(part) for part in _LINE_BREAK_RE.split(region))
    return [entry for entry in entries if entry]


def extract_changelog(
    html: str, rule: ExtractionRule = FIELD_RULES[PageField.CHANGELOG]
) -> list[str]:
    entries: list[str] = []
    for region in extract_raw(html, rule):
        entries.extend(split_changelog(region))
    return entries


def extract(html: str, field: PageField) -> str | list[str] | None:
    rule = FIELD_RULES[field]
    if field is PageField.CHANGELOG:
        return extract_changelog(html, rule)
    return extract_field(html, rule)


def extract_version(html: str) -> str | None:
    return extract_field(html, FIELD_RULES[PageField.VERSION])


def extract_page_info(
    html: str,
    *,
    url: str,
    fields: Iterable[PageField] | None = None,
) -> PageInfo:
    wanted = set(PageField) if fields is None else set(fields)
    values: dict[str, object] = {}
    for field in wanted:
        value = extract(html, field)
        if field is PageField.CHANGELOG:
            values[field.value] = tuple(value or ())
        else:
            values[field.value] = value
    return PageInfo(url=url, **values)  # type: ignore[arg-type]
