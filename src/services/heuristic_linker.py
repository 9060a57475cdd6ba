"""
Parent inference for auto-created child reference entries.

Spreadsheets often name a sub-department (or catalog item) without its
department (or item category) on every row. When a child entry has to be
created, its parent is chosen by majority vote over the batch rows that
name the child together with a parent; ties go to the parent seen first.
If no row pairs the child with a parent that resolves, the child is
attached to a default parent ("General"), created on demand at most once
per import call.
"""

from collections import Counter
from typing import TYPE_CHECKING, Dict, Optional, Sequence

from src.models import ReferenceEntry, Status, normalize_name
from src.utils.constants import DEFAULT_PARENT_DESCRIPTION

from .logging_utils import get_service_logger

if TYPE_CHECKING:
    from .import_context import ImportContext
    from .reference_catalog import ReferenceField

logger = get_service_logger(__name__)


def infer_parent_name(
    rows: Sequence, child_attr: str, parent_attr: str, child_name: str
) -> Optional[str]:
    """
    Majority vote for the parent of a child name.

    Args:
        rows: Batch rows
        child_attr: Row attribute holding the child's name
        parent_attr: Row attribute holding the parent's name
        child_name: Child name (any casing)

    Returns:
        Normalized parent name with the highest count (earliest first
        appearance on a tie), or None if no row pairs the child with a parent
    """
    child_key = normalize_name(child_name)
    votes: Counter = Counter()
    first_seen: Dict[str, int] = {}

    for index, row in enumerate(rows):
        if normalize_name(getattr(row, child_attr, None)) != child_key:
            continue
        parent_key = normalize_name(getattr(row, parent_attr, None))
        if not parent_key:
            continue
        votes[parent_key] += 1
        first_seen.setdefault(parent_key, index)

    if not votes:
        return None

    return min(votes, key=lambda key: (-votes[key], first_seen[key]))


def ensure_default_parent(context: "ImportContext", field: "ReferenceField") -> ReferenceEntry:
    """
    Return the default parent for a child field, creating it if needed.

    The new parent is added to the session and the catalog snapshot so
    later children in the same call reuse it.
    """
    link = field.parent
    catalog = context.catalog(link.model)

    existing = catalog.lookup(link.default_name)
    if existing is not None:
        return existing

    parent = link.model(
        name=link.default_name,
        description=DEFAULT_PARENT_DESCRIPTION.format(
            parent=link.model.label.lower(), children=f"{field.label.lower()}s"
        ),
        status=Status.ACTIVE,
    )
    parent.mark_created(context.actor, context.started_at)
    context.session.add(parent)
    catalog.add(parent)

    logger.info(f"Created default {link.model.label} '{link.default_name}'")
    return parent


def link_parent(
    context: "ImportContext", field: "ReferenceField", child_name: str, rows: Sequence
) -> str:
    """
    Choose the parent id for a child entry about to be created.

    Returns:
        Id of the voted parent if it resolves, else of the default parent
    """
    link = field.parent
    candidate = infer_parent_name(rows, field.attr, link.attr, child_name)

    if candidate is not None:
        parent_id = context.catalog(link.model).resolve(candidate)
        if parent_id is not None:
            return parent_id

    return ensure_default_parent(context, field).id
