"""Usage: cost document pipeline (style -> extractor -> customer matching)."""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Sequence

from cost_parser.schemas.cost import CostParseResult, CostStyle, CustomerEntry, ParsedCostItem
from cost_parser.schemas.document import DocumentText
from cost_parser.services.cost import CustomerMatcher, new_style, old_style, resolve_style

logger = logging.getLogger(__name__)

Extractor = Callable[[Sequence[str]], list[ParsedCostItem]]

EXTRACTORS: dict[CostStyle, Extractor] = {
    CostStyle.NEW: new_style.parse_pages,
    CostStyle.OLD: old_style.parse_document,
}


class CostExtractionPipeline:
    """Pipeline turning extracted page texts into matched cost records."""

    def __init__(self, customers: Iterable[CustomerEntry] | None = None) -> None:
        self.matcher = CustomerMatcher(customers or [])

    def run(
        self,
        document: DocumentText | Sequence[str],
        *,
        style: str | CostStyle | None = None,
    ) -> CostParseResult:
        """Parse every page/block of ``document`` and attach registry matches."""

        start_time = time.perf_counter()
        if isinstance(document, DocumentText):
            pages = [page.text for page in document.pages]
            text = document.joined_text()
        else:
            pages = list(document)
            text = "\n".join(pages)

        resolved = resolve_style(text, style)
        logger.info("Cost extraction started: pages=%d style=%s", len(pages), resolved.value)

        items = EXTRACTORS[resolved](pages)
        matched = self.matcher.apply(items)
        result = CostParseResult.from_items(resolved, matched)

        logger.info(
            "Cost extraction completed: items=%d matched=%d registry=%d duration=%.4fs",
            result.item_count,
            result.matched_count,
            len(self.matcher),
            time.perf_counter() - start_time,
        )
        return result
