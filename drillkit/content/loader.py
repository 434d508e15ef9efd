"""
Content loader for drill items.

Each domain is stored as a JSON array in <content_dir>/<domain>.json. The
bundled files live next to this module under data/; a different directory can
be supplied per call or through DRILL_CONTENT_DIR.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from drillkit.content.models import MODEL_FOR_DOMAIN, ContentDomain, DrillItem
from drillkit.errors import ContentError

BUNDLED_CONTENT_DIR = Path(__file__).parent / "data"


def _coerce_domain(domain: str | ContentDomain) -> ContentDomain:
    if isinstance(domain, ContentDomain):
        return domain
    try:
        return ContentDomain(domain.lower())
    except ValueError:
        known = ", ".join(d.value for d in ContentDomain)
        raise ContentError(f"Unknown content domain '{domain}' (expected one of: {known})") from None


def _read_domain_file(domain: ContentDomain, content_dir: Path | None) -> list[DrillItem]:
    base = Path(content_dir) if content_dir is not None else BUNDLED_CONTENT_DIR
    file_path = base / f"{domain.value}.json"
    if not file_path.exists():
        raise ContentError(f"Content file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {file_path}: {e}") from e

    adapter = TypeAdapter(list[MODEL_FOR_DOMAIN[domain]])
    try:
        items = adapter.validate_python(raw)
    except ValidationError as e:
        raise ContentError(f"Invalid {domain.value} content in {file_path}: {e}") from e

    logger.debug(f"Loaded {len(items)} {domain.value} items from {file_path}")
    return items


def load_items(
    domain: str | ContentDomain,
    groups: Iterable[str] | None = None,
    content_dir: Path | str | None = None,
) -> list[DrillItem]:
    """
    Load the drill items for a domain.

    Args:
        domain: Content domain (enum or its string value)
        groups: Keep only items in these groups (e.g. "hiragana", "N5").
                None or empty keeps everything.
        content_dir: Directory holding <domain>.json. Defaults to the bundled data.

    Returns:
        Items in file order

    Raises:
        ContentError: Unknown domain, missing file or invalid content
    """
    resolved = _coerce_domain(domain)
    items = _read_domain_file(resolved, Path(content_dir) if content_dir else None)

    wanted = {g.lower() for g in groups} if groups else set()
    if wanted:
        items = [item for item in items if item.group.lower() in wanted]
    return items


def available_groups(
    domain: str | ContentDomain,
    content_dir: Path | str | None = None,
) -> list[str]:
    """List the groups present in a domain's content, in first-seen order."""
    resolved = _coerce_domain(domain)
    seen: dict[str, None] = {}
    for item in _read_domain_file(resolved, Path(content_dir) if content_dir else None):
        seen.setdefault(item.group, None)
    return list(seen)
