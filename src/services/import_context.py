"""
Per-call batch context threaded through the import pipeline.

One ImportContext is created for each import call and passed explicitly to
every phase (catalog extension, row processing, staging, commit). It holds
the session, the actor and timestamp stamped on every written row, the
in-memory reference catalog snapshots, and the result being accumulated.
Nothing in it outlives the call.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Dict, Optional, Set, Type

from sqlalchemy.orm import Session

from src.models import ReferenceEntry
from src.utils.config import get_default_actor
from src.utils.datetime_utils import utc_now

from .import_result import ImportResult
from .reference_catalog import ReferenceCatalog

if TYPE_CHECKING:
    from .upsert_stager import UpsertStager


@dataclass
class ImportContext:
    """
    State shared by the phases of a single import call.

    Attributes:
        session: Session used for every read and write of the call
        flow: Flow label used in messages ("employee", "SIM card", "asset")
        actor: Recorded in created_by/updated_by
        started_at: Timestamp recorded on every row written by the call
        result: Accumulated ImportResult
        catalogs: Reference catalog snapshots, loaded on first use
        known_codes: Business codes in use per reference type, loaded on first use
        stager: Upsert stager for the flow's main entity
    """

    session: Session
    flow: str
    actor: str
    started_at: datetime
    result: ImportResult
    catalogs: Dict[type, ReferenceCatalog] = field(default_factory=dict)
    known_codes: Dict[type, Set[str]] = field(default_factory=dict)
    stager: Optional["UpsertStager"] = None

    @classmethod
    def begin(
        cls,
        session: Session,
        flow: str,
        actor: Optional[str] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> "ImportContext":
        """Create the context for a new import call."""
        return cls(
            session=session,
            flow=flow,
            actor=actor or get_default_actor(),
            started_at=clock(),
            result=ImportResult(flow),
        )

    def catalog(self, model: Type[ReferenceEntry]) -> ReferenceCatalog:
        """Return the snapshot for a reference type, loading it once per call."""
        if model not in self.catalogs:
            self.catalogs[model] = ReferenceCatalog.load(self.session, model)
        return self.catalogs[model]

    def codes_for(self, model: Type[ReferenceEntry]) -> Set[str]:
        """Return the mutable set of business codes in use for a reference type."""
        if model not in self.known_codes:
            self.known_codes[model] = {
                entry.code for entry in self.catalog(model).entries() if entry.code
            }
        return self.known_codes[model]
