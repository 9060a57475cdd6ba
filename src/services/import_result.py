"""
Import result reporting.

Collects the per-row errors raised while processing a batch and the
created/updated counts written by the commit phases, and renders them as
a summary for CLI display or as the wire dictionary returned to callers.

Partial success (some rows written, some rejected) is reported as
success=False with non-zero counts, so callers must look at the counts
and not only the flag.
"""

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass
class ImportRowError:
    """Error attributed to one input row.

    Attributes:
        row: 1-based row number; 0 for errors about the request as a whole
        message: Human-readable message
    """

    row: int
    message: str

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation."""
        return {"row": self.row, "message": self.message}


class ImportResult:
    """
    Result of a bulk import call.

    Errors are append-only and kept in row order; counts are filled in by
    the commit phases once rows are durably written.
    """

    def __init__(self, flow: str = ""):
        self.flow = flow
        self.created_count: int = 0
        self.updated_count: int = 0
        self.errors: List[ImportRowError] = []

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def success(self) -> bool:
        """True only if no row produced an error."""
        return len(self.errors) == 0

    @property
    def has_errors(self) -> bool:
        """Check if any errors occurred during import."""
        return len(self.errors) > 0

    @property
    def total_written(self) -> int:
        """Rows that were created or updated."""
        return self.created_count + self.updated_count

    @property
    def is_partial(self) -> bool:
        """Some rows were written and some were rejected."""
        return self.has_errors and self.total_written > 0

    # -------------------------------------------------------------------------
    # Mutation methods
    # -------------------------------------------------------------------------

    def add_error(self, row: int, message: str) -> None:
        """Record a failed row."""
        self.errors.append(ImportRowError(row=row, message=message))

    def record_commit(self, created: int, updated: int) -> None:
        """Record counts from a successful commit."""
        self.created_count += created
        self.updated_count += updated

    # -------------------------------------------------------------------------
    # Reporting methods
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """
        Wire representation for API callers.

        Returns:
            {"success", "createdCount", "updatedCount", "errors": [{"row", "message"}]}
        """
        return {
            "success": self.success,
            "createdCount": self.created_count,
            "updatedCount": self.updated_count,
            "errors": [error.to_dict() for error in self.errors],
        }

    def get_summary(self, max_errors: int = 10) -> str:
        """Generate user-friendly summary for CLI display."""
        title = f"Import Summary ({self.flow})" if self.flow else "Import Summary"
        lines = [
            "=" * 60,
            title,
            "=" * 60,
            f"  Created: {self.created_count}",
            f"  Updated: {self.updated_count}",
            f"  Failed:  {len(self.errors)}",
        ]

        if self.errors:
            lines.append("\nErrors:")
            for error in self.errors[:max_errors]:
                lines.append(f"  - Row {error.row}: {error.message}")
            if len(self.errors) > max_errors:
                lines.append(f"  ... and {len(self.errors) - max_errors} more errors")

        if self.success:
            lines.append("\nStatus: OK")
        elif self.is_partial:
            lines.append("\nStatus: PARTIAL - some rows were not imported")
        else:
            lines.append("\nStatus: FAILED")

        lines.append("=" * 60)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"ImportResult(success={self.success}, created={self.created_count}, "
            f"updated={self.updated_count}, errors={len(self.errors)})"
        )
