from decimal import Decimal
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

StyleOption = Literal["auto", "new", "old"]


class CostStyle(str, Enum):
    """Vendor document layouts the extractors understand."""

    NEW = "new"
    OLD = "old"


class CustomerEntry(BaseModel):
    """Known customer the extracted names are matched against."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str = Field(..., description="Registry identifier")
    name: Optional[str] = Field(default=None, description="Display name")


class ParsedCostItem(BaseModel):
    """One billable record recovered from a page (new style) or block (old style)."""

    model_config = ConfigDict(frozen=True)

    style: CostStyle = Field(..., description="Layout that produced this record.")
    retail_customer: Optional[str] = Field(
        default=None,
        description="Customer name above the 'Retail' marker (new style).",
    )
    legal_name: Optional[str] = Field(
        default=None,
        description="Value of 'LEGAL NAME:' (old style).",
    )
    org_name: Optional[str] = Field(
        default=None,
        description="Value of 'ORGANIZATION:' (old style).",
    )
    customer_name: Optional[str] = Field(
        default=None,
        description="Best display name for the customer.",
    )
    location: Optional[str] = Field(default=None, description="City of the ship-to/charge-to address.")
    ordered_by: Optional[str] = Field(default=None, description="Requester (new style).")
    amount: Optional[Decimal] = Field(default=None, description="Billed amount.")
    currency: str = Field(default="USD", description="Three letter currency code.")
    invoice_number: Optional[str] = None
    order_number: Optional[str] = None
    description: Optional[str] = None
    serial_number: Optional[str] = None
    contract_start: Optional[str] = Field(default=None, description="ISO date (YYYY-MM-DD).")
    contract_end: Optional[str] = Field(default=None, description="ISO date (YYYY-MM-DD).")
    due_date: Optional[str] = Field(default=None, description="ISO date (YYYY-MM-DD).")
    raw_text: str = Field(..., description="Source text the fields were derived from.")
    matched_customer_id: Optional[str] = Field(
        default=None,
        description="Registry id assigned by the customer matcher.",
    )

    @field_validator(
        "retail_customer",
        "legal_name",
        "org_name",
        "customer_name",
        "location",
        "ordered_by",
        "invoice_number",
        "order_number",
        "description",
        "serial_number",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_serializer("amount", when_used="json")
    def _amount_as_number(self, value: Optional[Decimal]) -> Optional[float]:
        """JSON renders a float, so amounts past ~15 significant digits lose precision."""

        return float(value) if value is not None else None

    def match_name(self) -> str:
        """Name used for registry lookup, falling back through the identity fields."""

        return (
            self.customer_name
            or self.retail_customer
            or self.legal_name
            or self.org_name
            or ""
        )

    def with_match(self, customer_id: Optional[str]) -> "ParsedCostItem":
        return self.model_copy(update={"matched_customer_id": customer_id})


class CostParseRequest(BaseModel):
    """Already-extracted page texts of one vendor document."""

    pages: list[str] = Field(..., description="Page texts in document order.")
    style: Optional[StyleOption] = Field(
        default=None,
        description="Layout override; falls back to the configured default.",
    )
    customers: Optional[list[CustomerEntry]] = Field(
        default=None,
        description="Registry to match against instead of the startup registry.",
    )


class CostParseResult(BaseModel):
    """Records extracted from one document plus match statistics."""

    style: CostStyle
    items: list[ParsedCostItem] = Field(default_factory=list)
    item_count: int = Field(default=0, ge=0)
    matched_count: int = Field(default=0, ge=0)

    @classmethod
    def from_items(cls, style: CostStyle, items: list[ParsedCostItem]) -> "CostParseResult":
        return cls(
            style=style,
            items=items,
            item_count=len(items),
            matched_count=sum(1 for item in items if item.matched_customer_id),
        )
