"""Usage: pick the layout used to parse a vendor cost document."""

from __future__ import annotations

import logging

from cost_parser.schemas.cost import CostStyle

logger = logging.getLogger(__name__)

OLD_STYLE_MARKER = "DEBIT/CREDIT MEMO"
NEW_STYLE_MARKER = "Device Serial Number"


def detect_style(text: str) -> CostStyle:
    # Memo marker takes precedence over the device serial marker.
    if OLD_STYLE_MARKER in text:
        return CostStyle.OLD
    if NEW_STYLE_MARKER in text:
        return CostStyle.NEW
    return CostStyle.NEW


def resolve_style(text: str, override: str | CostStyle | None = None) -> CostStyle:
    """Return ``override`` when it names a layout, otherwise detect it from ``text``.

    Raises:
        ValueError: If ``override`` is not one of ``auto``, ``new`` or ``old``.
    """

    if isinstance(override, CostStyle):
        return override
    if override is None or override == "auto":
        style = detect_style(text)
        logger.debug("Cost style detected: %s", style.value)
        return style
    try:
        return CostStyle(override)
    except ValueError as exc:
        raise ValueError(
            f"Unsupported style override: {override!r} (expected 'auto', 'new' or 'old')"
        ) from exc
