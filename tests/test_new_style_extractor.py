from __future__ import annotations

from decimal import Decimal

from cost_parser.schemas.cost import CostStyle
from cost_parser.services.cost.new_style import (
    extract_item_description,
    extract_serial_number,
    is_ordered_by_value,
    parse_page,
    parse_pages,
    pick_ordered_by,
    pick_retail_customer,
)


def _page(lines: list[str]) -> str:
    return "\n".join(lines)


def _full_page() -> str:
    return _page(
        [
            "Invoice",
            "Device Serial Number",
            "Green Valley Farms",
            "PO Box 118",
            "4410 County Road 12",
            "Retail",
            "Document Information",
            "90012345",
            "USD",
            "Ordered By:",
            "JSMITH42",
            "Ship To:",
            "Green Valley Farms",
            "4410 County Road 12",
            "Ames, IA 50010",
            "Contract Start Date: 03/01/2024",
            "Contract End Date: 02/28/2025",
            "Due Date: 03/31/2024",
            "Items Material Info",
            "0004512 JDLink Connect Subscription",
            "12 Month Term",
            "License Number: LIC-778899",
            "Machine Serial Number:",
            "Shipment 4482",
            "1RW8320RTMD123456",
            "Subtotal 1,100.00",
            "Total Amount With Tax 1,188.00",
        ]
    )


def test_parse_page_recovers_all_fields() -> None:
    text = _full_page()

    item = parse_page(text)

    assert item.style is CostStyle.NEW
    assert item.retail_customer == "Green Valley Farms"
    assert item.customer_name == "Green Valley Farms"
    assert item.legal_name is None
    assert item.org_name is None
    assert item.invoice_number == "90012345"
    assert item.currency == "USD"
    assert item.ordered_by == "JSMITH42"
    assert item.location == "Ames"
    assert item.contract_start == "2024-03-01"
    assert item.contract_end == "2025-02-28"
    assert item.due_date == "2024-03-31"
    assert item.description == "JDLink Connect Subscription 12 Month Term"
    assert item.order_number == "LIC-778899"
    assert item.serial_number == "1RW8320RTMD123456"
    assert item.amount == Decimal("1188.00")
    assert item.raw_text == text
    assert item.matched_customer_id is None


def test_end_to_end_minimal_page() -> None:
    page_one = _page(
        [
            "Acme Corp",
            "Retail",
            "Document Information",
            "INV-1001",
            "USD",
            "Contract Start Date: 01/01/2024",
            "Contract End Date: 12/31/2024",
            "999.00",
        ]
    )
    page_two = _page(["Acme Corp", "Retail", "Document Information", "INV-1002"])

    items = parse_pages([page_one, page_two])

    assert len(items) == 2
    first = items[0]
    assert first.customer_name == "Acme Corp"
    assert first.invoice_number == "INV-1001"
    assert first.currency == "USD"
    assert first.contract_start == "2024-01-01"
    assert first.contract_end == "2024-12-31"
    assert first.amount == Decimal("999.00")
    assert items[1].invoice_number == "INV-1002"
    assert items[1].amount is None


def test_page_without_fields_still_yields_record() -> None:
    item = parse_page("Device Serial Number")

    assert item.style is CostStyle.NEW
    assert item.currency == "USD"
    for field in (
        "retail_customer",
        "customer_name",
        "location",
        "ordered_by",
        "amount",
        "invoice_number",
        "order_number",
        "description",
        "serial_number",
        "contract_start",
        "contract_end",
        "due_date",
    ):
        assert getattr(item, field) is None, field


def test_empty_page_still_yields_record() -> None:
    items = parse_pages(["", "Acme\nRetail"])

    assert len(items) == 2
    assert items[0].raw_text == ""
    assert items[1].customer_name == "Acme"


def test_amount_is_last_money_value_on_page() -> None:
    item = parse_page(_page(["Line 1 50.00", "Line 2 25.00", "Total 75.00", "Page 1 of 1"]))

    assert item.amount == Decimal("75.00")


def test_currency_is_first_three_letter_line() -> None:
    item = parse_page(_page(["Invoice", "CAD", "USD"]))

    assert item.currency == "CAD"


def test_retail_marker_is_case_sensitive() -> None:
    item = parse_page(_page(["Acme Corp", "RETAIL"]))

    assert item.retail_customer is None


def test_retail_marker_on_first_line_has_no_customer() -> None:
    item = parse_page(_page(["Retail", "Acme Corp"]))

    assert item.retail_customer is None


def test_pick_retail_customer_skips_address_lines() -> None:
    lines = ["Acme Corp", "PO Box 9", "17 Elm Street", "Retail"]

    assert pick_retail_customer(lines, 3) == "Acme Corp"


def test_pick_retail_customer_falls_back_to_predecessor() -> None:
    lines = ["1 A", "2 B", "3 C", "4 D", "5 E", "6 F", "Retail"]

    assert pick_retail_customer(lines, 6) == "6 F"


def test_description_single_line() -> None:
    lines = ["Items Material Info", "0004512 JDLink Connect", "License Number: X", "100.00"]

    assert extract_item_description(lines, 0) == "JDLink Connect"


def test_description_without_item_code_uses_first_line() -> None:
    lines = ["Items Material Info", "Remote Display Access", "1,000.00"]

    assert extract_item_description(lines, 0) == "Remote Display Access"


def test_description_stops_at_next_items_header() -> None:
    lines = ["Items Material Info", "12345 Operations Center", "Items Material Info (cont.)"]

    assert extract_item_description(lines, 0) == "Operations Center"


def test_description_missing_window() -> None:
    assert extract_item_description(["Items Material Info"], 0) is None


def test_license_line_without_description_keeps_description_null() -> None:
    item = parse_page(_page(["License Number: LIC-1"]))

    assert item.order_number == "LIC-1"
    assert item.description is None


def test_serial_number_inline() -> None:
    lines = ["Machine Serial Number: 1XW8R0004MK12"]

    assert extract_serial_number(lines, 0) == "1XW8R0004MK12"


def test_serial_number_skips_noise_lines() -> None:
    lines = [
        "Machine Serial Number:",
        "Shipment Number: 77",
        "Total Amount With Tax",
        "1,250.00",
        "ABCD1234",
        "1XW8R0004MK12",
    ]

    assert extract_serial_number(lines, 0) == "1XW8R0004MK12"


def test_serial_number_missing() -> None:
    assert extract_serial_number(["Machine Serial Number:", "Thanks"], 0) is None


def test_ordered_by_value_classifier() -> None:
    assert is_ordered_by_value("JSMITH42") is True
    assert is_ordered_by_value("USD") is False
    assert is_ordered_by_value("03/01/2024") is False
    assert is_ordered_by_value("90012345") is False
    assert is_ordered_by_value("O-55512") is False
    assert is_ordered_by_value("Total Amount With Tax 2") is False
    assert is_ordered_by_value("john smith") is False


def test_ordered_by_scans_backward_when_next_line_fails() -> None:
    lines = ["KJONES7", "USD", "03/01/2024", "Ordered By:", "90012345"]

    assert pick_ordered_by(lines, 3) == "KJONES7"


def test_ordered_by_falls_back_to_predecessor() -> None:
    lines = ["Sales Office", "Ordered By:", "USD"]

    assert pick_ordered_by(lines, 1) == "Sales Office"


def test_ordered_by_at_top_without_candidates() -> None:
    assert pick_ordered_by(["Ordered By:"], 0) is None


def test_extraction_is_deterministic() -> None:
    text = _full_page()

    assert parse_page(text).model_dump() == parse_page(text).model_dump()


def test_ordered_by_requires_ascii_digit() -> None:
    assert is_ordered_by_value("JSMITH٤٢") is False


def test_item_code_must_be_ascii_digits() -> None:
    lines = ["Items Material Info", "١٢٣٤٥ Widget"]

    assert extract_item_description(lines, 0) == "١٢٣٤٥ Widget"


def test_ordered_by_lookback_reaches_eighth_line() -> None:
    lines = ["KJONES7"] + ["x"] * 7 + ["Ordered By:"]

    assert pick_ordered_by(lines, 8) == "KJONES7"


def test_ordered_by_lookback_stops_after_eight_lines() -> None:
    lines = ["KJONES7"] + ["x"] * 8 + ["Ordered By:"]

    assert pick_ordered_by(lines, 9) == "x"


def test_description_item_code_in_fifth_line_is_used() -> None:
    lines = ["Items Material Info", "a", "b", "c", "d", "12345 Late Item"]

    assert extract_item_description(lines, 0) == "Late Item a"


def test_description_ignores_lines_past_window() -> None:
    lines = ["Items Material Info", "a", "b", "c", "d", "e", "12345 Late Item"]

    assert extract_item_description(lines, 0) == "a b"
