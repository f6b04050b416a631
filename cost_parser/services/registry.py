"""Usage: load the startup customer registry from a JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from cost_parser.schemas.cost import CustomerEntry

logger = logging.getLogger(__name__)

_REGISTRY_ADAPTER = TypeAdapter(list[CustomerEntry])


def load_customer_registry(path: Path) -> list[CustomerEntry]:
    """Read a JSON array of ``{"id": ..., "name": ...}`` objects.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not a valid registry.
    """

    if not path.exists():
        raise FileNotFoundError(f"Customer registry not found: {path}")

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        customers = _REGISTRY_ADAPTER.validate_python(payload)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ValueError(f"Invalid customer registry {path}: {exc}") from exc

    logger.info("Loaded %d customers from %s", len(customers), path)
    return customers
