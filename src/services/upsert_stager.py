"""
Upsert staging and phased commit for main entities and assignments.

Staging decides, per natural key, whether a row becomes an UPDATE of an
existing record or a CREATE of a new one, using a snapshot of the main
entity table loaded once per call. Nothing is written until commit:

1. Creates are added with add_all and updates are flushed in the same
   unit of work; one commit. Failure raises EntityCommitError.
2. Assignment records are added and committed separately. Failure raises
   AssociationCommitError; step 1 stays committed and the partial result
   travels on the exception.

Counts on the ImportResult are only recorded after a successful commit.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, Iterable, List, Optional, Set, Tuple, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models import AssignmentStatus, BaseModel, Employee, normalize_name

from .exceptions import AssociationCommitError, EntityCommitError
from .logging_utils import get_service_logger, log_operation

if TYPE_CHECKING:
    from .import_context import ImportContext

logger = get_service_logger(__name__)

E = TypeVar("E", bound=BaseModel)


# ============================================================================
# Main Entity Staging
# ============================================================================


class UpsertStager(Generic[E]):
    """
    Natural-key index over a main entity table plus the staged changes.

    Attributes:
        model: Main entity class
        entity_label: Plural label used in messages ("employee", "SIM card")
        creates: New entities, in row order
        updates: Existing entities overwritten by a row, in row order
        associations: Assignment records to write after the entities
    """

    def __init__(
        self,
        model: Type[E],
        entities: Iterable[E],
        key_of: Callable[[E], Optional[str]],
        entity_label: str,
    ):
        self.model = model
        self.entity_label = entity_label
        self._by_key: Dict[str, E] = {}
        for entity in entities:
            key = key_of(entity)
            if key:
                self._by_key[key] = entity
        self.creates: List[E] = []
        self.updates: List[E] = []
        self.associations: List[BaseModel] = []

    @classmethod
    def load(
        cls,
        session: Session,
        model: Type[E],
        key_of: Callable[[E], Optional[str]],
        entity_label: str,
    ) -> "UpsertStager[E]":
        """Snapshot every row of the main entity table."""
        return cls(model, session.query(model).all(), key_of, entity_label)

    def find(self, key: str) -> Optional[E]:
        """Existing (or already staged) entity for a natural key."""
        return self._by_key.get(key)

    def stage(
        self,
        context: "ImportContext",
        key: str,
        values: Dict[str, Any],
        create_values: Optional[Dict[str, Any]] = None,
    ) -> Tuple[E, bool]:
        """
        Stage a CREATE or UPDATE for a natural key.

        Args:
            context: Batch context (actor and timestamp)
            key: Normalized natural key
            values: Fields written in both cases
            create_values: Extra fields written only on create (natural
                key columns, defaults); overridden by values

        Returns:
            (entity, created)
        """
        entity = self._by_key.get(key)

        if entity is None:
            entity = self.model(**{**(create_values or {}), **values})
            entity.mark_created(context.actor, context.started_at)
            self._by_key[key] = entity
            self.creates.append(entity)
            return entity, True

        for attr, value in values.items():
            setattr(entity, attr, value)
        entity.mark_updated(context.actor, context.started_at)
        if entity not in self.updates and entity not in self.creates:
            self.updates.append(entity)
        return entity, False

    def stage_association(self, association: BaseModel) -> None:
        """Queue an assignment record for the association commit."""
        self.associations.append(association)


# ============================================================================
# Assignment Snapshots
# ============================================================================


class ActiveAssignments:
    """
    Set of (employee id, resource id) pairs with an ASSIGNED record.

    Pairs staged during the call are added so a batch never stages two
    active assignments for the same pair.
    """

    def __init__(self, pairs: Iterable[Tuple[str, str]] = ()):
        self._pairs: Set[Tuple[str, str]] = set(pairs)

    @classmethod
    def load(cls, session: Session, model: Type[BaseModel], resource_attr: str) -> "ActiveAssignments":
        resource_column = getattr(model, resource_attr)
        rows = (
            session.query(model.employee_id, resource_column)
            .filter(model.status == AssignmentStatus.ASSIGNED)
            .all()
        )
        return cls((employee_id, resource_id) for employee_id, resource_id in rows)

    def is_assigned(self, employee_id: str, resource_id: str) -> bool:
        return (employee_id, resource_id) in self._pairs

    def add(self, employee_id: str, resource_id: str) -> None:
        self._pairs.add((employee_id, resource_id))


def load_assignment_targets(session: Session) -> Dict[str, Employee]:
    """
    Index employees by normalized employee code.

    Inactive employees are included; callers check is_active.
    """
    return {
        normalize_name(employee.employee_id): employee
        for employee in session.query(Employee).all()
    }


# ============================================================================
# Commit
# ============================================================================


def commit_entities(context: "ImportContext") -> None:
    """
    Commit staged creates and updates in one unit of work.

    Raises:
        EntityCommitError: On any store failure; the session is rolled back
    """
    stager = context.stager
    session = context.session

    try:
        if stager.creates:
            session.add_all(stager.creates)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        log_operation(
            logger,
            operation="commit_entities",
            outcome="error",
            level=logging.ERROR,
            flow=context.flow,
            error=str(e),
        )
        raise EntityCommitError(stager.entity_label, e) from e

    context.result.record_commit(created=len(stager.creates), updated=len(stager.updates))
    log_operation(
        logger,
        operation="commit_entities",
        outcome="success",
        flow=context.flow,
        created_count=len(stager.creates),
        updated_count=len(stager.updates),
    )


def commit_associations(context: "ImportContext") -> None:
    """
    Commit staged assignment records.

    Raises:
        AssociationCommitError: On any store failure; entities committed
            by commit_entities are kept and the result is attached
    """
    stager = context.stager
    if not stager.associations:
        return

    session = context.session
    try:
        session.add_all(stager.associations)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        log_operation(
            logger,
            operation="commit_associations",
            outcome="error",
            level=logging.ERROR,
            flow=context.flow,
            error=str(e),
        )
        raise AssociationCommitError(stager.entity_label, e, result=context.result) from e

    log_operation(
        logger,
        operation="commit_associations",
        outcome="success",
        flow=context.flow,
        assignments=len(stager.associations),
    )


def commit_staged(context: "ImportContext") -> None:
    """Run both commit phases in order."""
    commit_entities(context)
    commit_associations(context)
