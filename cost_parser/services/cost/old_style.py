"""Usage: multi-record field recovery for the legacy debit/credit memo layout."""

from __future__ import annotations

import logging
import re
from typing import Sequence

from cost_parser.schemas.cost import CostStyle, ParsedCostItem
from cost_parser.services.cost.primitives import (
    MONEY_RE,
    extract_city,
    find_index,
    is_serial_value,
    line_value,
    parse_date,
    parse_money,
    split_lines,
)

logger = logging.getLogger(__name__)

LEGAL_NAME_LABEL = "LEGAL NAME:"
ORGANIZATION_LABEL = "ORGANIZATION:"
LOCAL_PRICE_LABEL = "LOCAL PRICE:"
ORDER_NUMBER_LABEL = "ORDER NUMBER:"
START_DATE_LABEL = "START DATE:"
END_DATE_LABEL = "END DATE:"
CHARGE_TO_LABEL = "CHARGE/CREDIT TO:"

_SERIAL_BEFORE_AMOUNT_RE = re.compile(
    r"([A-Z0-9]{13}|[A-Z0-9]{17})\s+\d{1,3}(?:,\d{3})*\.\d{2}",
    re.IGNORECASE | re.ASCII,
)


def split_blocks(lines: Sequence[str]) -> list[list[str]]:
    """Cut ``lines`` into runs that each start at a 'LEGAL NAME:' line."""

    starts = [idx for idx, line in enumerate(lines) if line.startswith(LEGAL_NAME_LABEL)]
    blocks: list[list[str]] = []
    for pos, start in enumerate(starts):
        end = starts[pos + 1] if pos + 1 < len(starts) else len(lines)
        blocks.append(list(lines[start:end]))
    return blocks


def parse_document(pages: Sequence[str]) -> list[ParsedCostItem]:
    """Build one record per legal-name block across all pages of a document."""

    lines = split_lines("\n".join(pages))

    charge_idx = find_index(lines, lambda line: line.startswith(CHARGE_TO_LABEL))
    location = extract_city(lines, charge_idx) if charge_idx >= 0 else None

    items = [parse_block(block, location=location) for block in split_blocks(lines)]
    if not items:
        logger.debug("Old-style document has no '%s' blocks", LEGAL_NAME_LABEL)
    return items


def parse_block(block: Sequence[str], *, location: str | None = None) -> ParsedCostItem:
    legal_name = line_value(block, LEGAL_NAME_LABEL)
    org_name = line_value(block, ORGANIZATION_LABEL)
    customer_name = org_name if org_name and org_name.lower() != "n/a" else legal_name

    price_line = next((line for line in block if line.startswith(LOCAL_PRICE_LABEL)), None)
    amount = parse_money(price_line) if price_line else None

    order_idx = find_index(block, lambda line: line.startswith(ORDER_NUMBER_LABEL))
    description = block[order_idx + 1] if 0 <= order_idx < len(block) - 1 else None

    money_line = next((line for line in block if MONEY_RE.search(line)), None)
    serial_number = serial_from_amount_line(money_line) if money_line else None

    item = ParsedCostItem(
        style=CostStyle.OLD,
        legal_name=legal_name,
        org_name=org_name,
        customer_name=customer_name,
        location=location,
        amount=amount,
        order_number=line_value(block, ORDER_NUMBER_LABEL),
        description=description,
        serial_number=serial_number,
        contract_start=parse_date(line_value(block, START_DATE_LABEL)),
        contract_end=parse_date(line_value(block, END_DATE_LABEL)),
        raw_text="\n".join(block),
    )
    logger.debug(
        "Old-style block parsed legal_name=%s amount=%s serial=%s",
        legal_name,
        amount,
        serial_number,
    )
    return item


def serial_from_amount_line(line: str) -> str | None:
    """Serial printed just before the price, else the first serial-shaped token."""

    match = _SERIAL_BEFORE_AMOUNT_RE.search(line)
    if match:
        return match.group(1)
    return next((token for token in line.split() if is_serial_value(token)), None)
