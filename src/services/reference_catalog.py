"""
Reference catalog resolution and extension.

Import rows refer to master data by display name. This module provides:

- ReferenceCatalog: an in-memory snapshot of one reference table keyed by
  normalized name, loaded once per import call. Lookups never touch the
  store again, so resolving N rows costs one query per reference type.
- ReferenceField: declares which row attribute names which reference type,
  which foreign key it fills on the main entity, and (for hierarchical
  types) how the parent is found.
- extend_catalog / extend_reference_catalogs: before any row is processed,
  create every name the batch uses that the catalog does not know yet, and
  commit them in a single write.

Usage:
    from src.services.reference_catalog import ReferenceField, extend_reference_catalogs

    fields = (ReferenceField("department_name", Department, "department_id"),)
    extend_reference_catalogs(context, rows, fields)
    department_id = context.catalog(Department).resolve("  finance ")
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Generic, Iterable, List, Optional, Sequence, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models import ReferenceEntry, Status, normalize_name
from src.utils.constants import AUTO_CREATED_DESCRIPTION, DEFAULT_PARENT_NAME

from .code_generator import generate_unique_code
from .exceptions import CatalogExtensionError, CodeGenerationError
from .heuristic_linker import link_parent
from .logging_utils import get_service_logger, log_operation

if TYPE_CHECKING:
    from .import_context import ImportContext

logger = get_service_logger(__name__)

R = TypeVar("R", bound=ReferenceEntry)


# ============================================================================
# Catalog Snapshot
# ============================================================================


class ReferenceCatalog(Generic[R]):
    """
    Normalized-name index over one reference table.

    At most one entry exists per normalized name. Entries created during
    the call are added with add() so later lookups see them.
    """

    def __init__(self, model: Type[R], entries: Iterable[R] = ()):
        self.model = model
        self._entries: Dict[str, R] = {}
        for entry in entries:
            key = entry.normalized_name or normalize_name(entry.name)
            self._entries.setdefault(key, entry)

    @classmethod
    def load(cls, session: Session, model: Type[R]) -> "ReferenceCatalog[R]":
        """Snapshot every row of the reference table."""
        return cls(model, session.query(model).all())

    @property
    def label(self) -> str:
        """Human-readable type name used in messages."""
        return self.model.label

    def lookup(self, name) -> Optional[R]:
        """
        Find the entry for a display name.

        Returns:
            The entry, or None if the name is blank or unknown
        """
        key = normalize_name(name)
        if not key:
            return None
        return self._entries.get(key)

    def resolve(self, name) -> Optional[str]:
        """Resolve a display name to the entry id, or None."""
        entry = self.lookup(name)
        return entry.id if entry is not None else None

    def add(self, entry: R) -> None:
        """Register a newly created entry."""
        self._entries[entry.normalized_name or normalize_name(entry.name)] = entry

    def entries(self) -> List[R]:
        """All entries in the snapshot."""
        return list(self._entries.values())

    def __contains__(self, name) -> bool:
        return self.lookup(name) is not None

    def __len__(self) -> int:
        return len(self._entries)


# ============================================================================
# Field Declarations
# ============================================================================


@dataclass(frozen=True)
class ParentLink:
    """
    Parent side of a hierarchical reference type.

    Attributes:
        attr: Row attribute holding the parent's display name
        model: Parent reference type
        fk: Child column that stores the parent id
        default_name: Parent used when no row in the batch names one
    """

    attr: str
    model: Type[ReferenceEntry]
    fk: str
    default_name: str = DEFAULT_PARENT_NAME


@dataclass(frozen=True)
class ReferenceField:
    """
    A reference-valued column of an import row.

    Attributes:
        attr: Row attribute holding the display name
        model: Reference type it names
        target: Foreign key column filled on the main entity
        parent: Set for child types (sub-department, item)
        code_prefix: Set for types that carry a generated business code
    """

    attr: str
    model: Type[ReferenceEntry]
    target: str
    parent: Optional[ParentLink] = None
    code_prefix: Optional[str] = None

    @property
    def label(self) -> str:
        return self.model.label


def collect_names(rows: Sequence, attr: str) -> Dict[str, str]:
    """
    Collect the distinct names used in one row attribute.

    Returns:
        Mapping of normalized name to the first display form seen (trimmed),
        in first-seen order; blank cells are ignored
    """
    names: Dict[str, str] = {}
    for row in rows:
        raw = getattr(row, attr, None)
        key = normalize_name(raw)
        if key and key not in names:
            names[key] = str(raw).strip()
    return names


# ============================================================================
# Catalog Extension
# ============================================================================


def extend_catalog(context: "ImportContext", field: ReferenceField, rows: Sequence) -> List[ReferenceEntry]:
    """
    Create the entries of one reference type that the batch names but the
    catalog lacks.

    New entries are added to the session and to the catalog snapshot but
    not committed; extend_reference_catalogs commits all types together.

    Args:
        context: Batch context
        field: Reference field being extended
        rows: Coerced import rows

    Returns:
        Newly created entries

    Raises:
        CodeGenerationError: If a business code could not be generated
    """
    catalog = context.catalog(field.model)
    description = AUTO_CREATED_DESCRIPTION.format(flow=context.flow)
    created: List[ReferenceEntry] = []

    for normalized, display in collect_names(rows, field.attr).items():
        if normalized in catalog:
            continue

        entry = field.model(
            name=display,
            normalized_name=normalized,
            description=description,
            status=Status.ACTIVE,
        )
        entry.mark_created(context.actor, context.started_at)

        if field.code_prefix:
            entry.code = generate_unique_code(field.code_prefix, context.codes_for(field.model))

        if field.parent is not None:
            setattr(entry, field.parent.fk, link_parent(context, field, normalized, rows))

        catalog.add(entry)
        created.append(entry)

    if created:
        context.session.add_all(created)
        log_operation(
            logger,
            operation="extend_catalog",
            outcome="staged",
            level=logging.DEBUG,
            flow=context.flow,
            reference_type=field.label,
            created_entries=len(created),
        )

    return created


def extend_reference_catalogs(
    context: "ImportContext", rows: Sequence, fields: Sequence[ReferenceField]
) -> List[ReferenceEntry]:
    """
    Extend every reference type used by a flow and commit once.

    Fields must list parent types before their children so that parents
    created by this call can be linked.

    Returns:
        All entries created, across types

    Raises:
        CatalogExtensionError: If the commit fails; nothing from this phase
            is persisted
        CodeGenerationError: If a business code could not be generated
    """
    session = context.session
    created: List[ReferenceEntry] = []

    try:
        for field in fields:
            created.extend(extend_catalog(context, field, rows))
        if created:
            session.commit()
    except CodeGenerationError:
        session.rollback()
        raise
    except SQLAlchemyError as e:
        session.rollback()
        log_operation(
            logger,
            operation="extend_catalog",
            outcome="error",
            level=logging.ERROR,
            flow=context.flow,
            error=str(e),
        )
        raise CatalogExtensionError(context.flow, e) from e

    log_operation(
        logger,
        operation="extend_catalog",
        outcome="success",
        flow=context.flow,
        created_entries=len(created),
    )
    return created
