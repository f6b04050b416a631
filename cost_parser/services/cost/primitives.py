"""Usage: shared line splitting and field matchers for vendor cost documents."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Callable, Sequence

MONEY_RE = re.compile(r"\b\d{1,3}(?:,\d{3})*\.\d{2}\b", re.ASCII)
DATE_RE = re.compile(r"(\d{2})/(\d{2})/(\d{4})", re.ASCII)
SERIAL_SHAPE_RE = re.compile(r"^[A-Z0-9]{13}$|^[A-Z0-9]{17}$", re.IGNORECASE | re.ASCII)
SHIPMENT_RE = re.compile(r"shipment", re.IGNORECASE)

ADDRESS_WINDOW = 10
_CITY_STATE_RE = re.compile(r",\s*[A-Z]{2}\b")
_STATE_ZIP_RE = re.compile(r"\b[A-Z]{2}\b\s\d{5}(?:-\d{4})?$", re.IGNORECASE | re.ASCII)
_STATE_TAIL_RE = re.compile(r"\s+[A-Z]{2}\b.*$")
_STREET_RE = re.compile(
    r"\b(st|street|ave|avenue|rd|road|blvd|drive|dr|hwy|highway|ln|lane)\b",
    re.IGNORECASE,
)
_NAME_STRIP_RE = re.compile(r"[^a-z0-9]+")


def split_lines(text: str) -> list[str]:
    """Split page text into trimmed, non-empty lines."""

    lines = (line.strip() for line in re.split(r"\r?\n", text or ""))
    return [line for line in lines if line]


def has_money(value: str) -> bool:
    return MONEY_RE.search(value) is not None


def parse_money(value: str) -> Decimal | None:
    """Return the first thousands-grouped amount in ``value`` (e.g. '1,234.56')."""

    match = MONEY_RE.search(value)
    if not match:
        return None
    try:
        return Decimal(match.group(0).replace(",", ""))
    except InvalidOperation:
        return None


def last_money(lines: Sequence[str]) -> Decimal | None:
    """Money value closest to the end of ``lines``; totals trail the detail rows."""

    for line in reversed(lines):
        amount = parse_money(line)
        if amount is not None:
            return amount
    return None


def parse_date(value: str | None) -> str | None:
    """Convert the first MM/DD/YYYY in ``value`` to YYYY-MM-DD."""

    if not value:
        return None
    match = DATE_RE.search(value)
    if not match:
        return None
    month, day, year = match.groups()
    return f"{year}-{month}-{day}"


def is_serial_value(value: str) -> bool:
    if SHIPMENT_RE.search(value):
        return False
    return SERIAL_SHAPE_RE.match("".join(value.split())) is not None


def is_address_line(value: str) -> bool:
    if "po box" in value.lower():
        return True
    if value[:1].isdigit():
        return True
    return _STREET_RE.search(value) is not None


def extract_city(lines: Sequence[str], header_idx: int) -> str | None:
    """Find the city in the address block that starts at ``header_idx``."""

    segment = lines[header_idx : header_idx + ADDRESS_WINDOW]
    for line in segment:
        if _CITY_STATE_RE.search(line):
            city = line.split(",", 1)[0].strip()
            if city:
                return city
            break

    for line in segment:
        if _STATE_ZIP_RE.search(line):
            city = _STATE_TAIL_RE.sub("", line).strip()
            return city or None
    return None


def line_value(lines: Sequence[str], label: str) -> str | None:
    """Text after ``label`` on the first line starting with it."""

    for line in lines:
        if line.startswith(label):
            value = line.replace(label, "", 1).strip()
            return value or None
    return None


def find_index(lines: Sequence[str], predicate: Callable[[str], bool]) -> int:
    for idx, line in enumerate(lines):
        if predicate(line):
            return idx
    return -1


def normalize_name(value: str | None) -> str:
    """Lowercase alphanumeric key used only for customer matching."""

    if not value:
        return ""
    return _NAME_STRIP_RE.sub("", value.lower())
