"""Usage: vendor cost document extraction and customer matching helpers."""

from cost_parser.services.cost.customer_matcher import CustomerMatcher, match_customer_id
from cost_parser.services.cost.style_detector import detect_style, resolve_style

__all__ = ["CustomerMatcher", "detect_style", "match_customer_id", "resolve_style"]
