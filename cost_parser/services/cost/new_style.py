"""Usage: per-page field recovery for the current vendor invoice layout."""

from __future__ import annotations

import logging
import re
from typing import Sequence

from cost_parser.schemas.cost import CostStyle, ParsedCostItem
from cost_parser.services.cost.primitives import (
    MONEY_RE,
    extract_city,
    find_index,
    has_money,
    is_address_line,
    is_serial_value,
    last_money,
    line_value,
    parse_date,
    split_lines,
)

logger = logging.getLogger(__name__)

RETAIL_MARKER = "Retail"
DOCUMENT_INFO_MARKER = "Document Information"
ITEMS_HEADER = "Items Material Info"
LICENSE_LABEL = "License Number:"
SERIAL_LABEL = "Machine Serial Number:"
START_LABEL = "Contract Start Date:"
END_LABEL = "Contract End Date:"
DUE_LABEL = "Due Date:"
ORDERED_BY_MARKER = "Ordered By:"
SHIP_TO_MARKER = "Ship To:"

RETAIL_LOOKBACK = 5
ITEMS_WINDOW = 5
ORDERED_BY_LOOKBACK = 8

_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")
_ITEM_CODE_RE = re.compile(r"^\d{5,}\s+", re.ASCII)
_SERIAL_NOISE_RE = re.compile(r"total amount with tax|shipment", re.IGNORECASE)
_DATE_ONLY_RE = re.compile(r"^\d{2}/\d{2}/\d{4}$", re.ASCII)
_TOTAL_WITH_TAX_RE = re.compile(r"total amount with tax", re.IGNORECASE)
_UPPER_THEN_DIGIT_RE = re.compile(r"[A-Z].*\d", re.ASCII)
_DIGITS_ONLY_RE = re.compile(r"^[0-9]+$")
_DESCRIPTION_LABELS = (LICENSE_LABEL, SERIAL_LABEL, START_LABEL, END_LABEL)


def parse_page(text: str) -> ParsedCostItem:
    """Build one record from a single page; missing fields stay ``None``."""

    lines = split_lines(text)

    retail_idx = find_index(lines, lambda line: line == RETAIL_MARKER)
    retail_customer = pick_retail_customer(lines, retail_idx) if retail_idx > 0 else None

    info_idx = find_index(lines, lambda line: line == DOCUMENT_INFO_MARKER)
    invoice_number = _line_at(lines, info_idx + 1) if info_idx >= 0 else None

    currency = next((line for line in lines if _CURRENCY_RE.match(line)), "USD")

    items_idx = find_index(lines, lambda line: line.startswith(ITEMS_HEADER))
    description = extract_item_description(lines, items_idx) if items_idx >= 0 else None

    license_number = line_value(lines, LICENSE_LABEL)
    serial_idx = find_index(lines, lambda line: line.startswith(SERIAL_LABEL))
    serial_number = extract_serial_number(lines, serial_idx) if serial_idx >= 0 else None

    ordered_idx = find_index(lines, lambda line: line == ORDERED_BY_MARKER)
    ordered_by = pick_ordered_by(lines, ordered_idx) if ordered_idx >= 0 else None

    ship_idx = find_index(lines, lambda line: line == SHIP_TO_MARKER)
    location = extract_city(lines, ship_idx) if ship_idx >= 0 else None

    item = ParsedCostItem(
        style=CostStyle.NEW,
        retail_customer=retail_customer,
        customer_name=retail_customer,
        location=location,
        ordered_by=ordered_by,
        amount=last_money(lines),
        currency=currency,
        invoice_number=invoice_number,
        # This layout prints the license number where the order number belongs.
        order_number=license_number,
        description=description,
        serial_number=serial_number,
        contract_start=_date_after(lines, START_LABEL),
        contract_end=_date_after(lines, END_LABEL),
        due_date=_date_after(lines, DUE_LABEL),
        raw_text=text,
    )
    logger.debug(
        "New-style page parsed customer=%s amount=%s invoice=%s",
        item.customer_name,
        item.amount,
        item.invoice_number,
    )
    return item


def parse_pages(pages: Sequence[str]) -> list[ParsedCostItem]:
    return [parse_page(text) for text in pages]


def pick_retail_customer(lines: Sequence[str], retail_idx: int) -> str | None:
    """Closest non-address line above the 'Retail' marker."""

    for idx in range(retail_idx - 1, max(0, retail_idx - RETAIL_LOOKBACK) - 1, -1):
        candidate = lines[idx]
        if is_address_line(candidate):
            continue
        return candidate
    return _line_at(lines, retail_idx - 1)


def extract_item_description(lines: Sequence[str], items_idx: int) -> str | None:
    after = list(lines[items_idx + 1 : items_idx + 1 + ITEMS_WINDOW])
    item_line = next((line for line in after if _ITEM_CODE_RE.match(line)), None)
    if item_line is None:
        item_line = after[0] if after else None
    if item_line is None:
        return None

    first = _ITEM_CODE_RE.sub("", item_line, count=1).strip()
    follow = next(
        (
            line
            for line in after
            if line != item_line
            and not line.startswith(_DESCRIPTION_LABELS)
            and not MONEY_RE.search(line)
        ),
        None,
    )
    if follow and not follow.startswith(ITEMS_HEADER):
        return f"{first} {follow}".strip()
    return first or None


def extract_serial_number(lines: Sequence[str], serial_idx: int) -> str | None:
    """Serial printed inline after the label, or on a later value line."""

    inline = lines[serial_idx].replace(SERIAL_LABEL, "", 1).strip()
    if inline:
        return inline
    for line in lines[serial_idx + 1 :]:
        if ":" in line or has_money(line) or _SERIAL_NOISE_RE.search(line):
            continue
        if is_serial_value(line):
            return line
    return None


def is_ordered_by_value(value: str) -> bool:
    if _CURRENCY_RE.match(value):
        return False
    if _DATE_ONLY_RE.match(value):
        return False
    if _DIGITS_ONLY_RE.match(value):
        return False
    if value.startswith("O-"):
        return False
    if _TOTAL_WITH_TAX_RE.search(value):
        return False
    return _UPPER_THEN_DIGIT_RE.search(value) is not None


def pick_ordered_by(lines: Sequence[str], ordered_idx: int) -> str | None:
    after = _line_at(lines, ordered_idx + 1)
    if after and is_ordered_by_value(after):
        return after

    for idx in range(ordered_idx - 1, max(0, ordered_idx - ORDERED_BY_LOOKBACK) - 1, -1):
        if is_ordered_by_value(lines[idx]):
            return lines[idx]
    return _line_at(lines, ordered_idx - 1)


def _line_at(lines: Sequence[str], idx: int) -> str | None:
    if 0 <= idx < len(lines):
        return lines[idx]
    return None


def _date_after(lines: Sequence[str], label: str) -> str | None:
    line = next((line for line in lines if line.startswith(label)), None)
    return parse_date(line)
