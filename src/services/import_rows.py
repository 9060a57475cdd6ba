"""
Import row shapes for the three bulk import flows.

Rows arrive as dictionaries decoded from JSON (or built from spreadsheet
cells). Keys are accepted in snake_case ("employee_id"), PascalCase
("EmployeeId") or camelCase ("employeeId"); missing keys become None.
Values are kept as supplied; trimming and placeholder handling happen
during row processing.
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, Tuple


def _wire_names(field_name: str) -> Tuple[str, str, str]:
    parts = field_name.split("_")
    pascal = "".join(part.capitalize() for part in parts)
    camel = parts[0] + "".join(part.capitalize() for part in parts[1:])
    return field_name, pascal, camel


class ImportRow:
    """Mixin providing dictionary coercion for row dataclasses."""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        """Build a row from a decoded JSON object."""
        values = {}
        for row_field in fields(cls):
            for key in _wire_names(row_field.name):
                if key in data:
                    values[row_field.name] = data[key]
                    break
        return cls(**values)

    @classmethod
    def coerce(cls, row):
        """
        Accept a row instance or a mapping.

        Raises:
            TypeError: If row is neither
        """
        if isinstance(row, cls):
            return row
        if isinstance(row, Mapping):
            return cls.from_dict(row)
        raise TypeError(f"Cannot build {cls.__name__} from {type(row).__name__}")


@dataclass
class EmployeeImportRow(ImportRow):
    """One employee spreadsheet row; employee_id is the natural key."""

    employee_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[str] = None
    department_name: Optional[str] = None
    sub_department_name: Optional[str] = None
    company_name: Optional[str] = None
    project_name: Optional[str] = None
    nationality_name: Optional[str] = None
    employee_category_name: Optional[str] = None
    employee_position_name: Optional[str] = None
    cost_center_name: Optional[str] = None


@dataclass
class SimCardImportRow(ImportRow):
    """
    One SIM card row; (sim_account_no, sim_service_no) is the natural key.

    assigned_to holds an employee code, not a surrogate id.
    """

    sim_account_no: Optional[str] = None
    sim_service_no: Optional[str] = None
    sim_start_date: Optional[Any] = None
    sim_type_name: Optional[str] = None
    sim_provider_name: Optional[str] = None
    sim_card_plan_name: Optional[str] = None
    sim_status: Optional[str] = None
    sim_serial_no: Optional[str] = None
    assigned_to: Optional[str] = None


@dataclass
class AssetImportRow(ImportRow):
    """One asset row; asset_tag is the natural key."""

    asset_tag: Optional[str] = None
    asset_name: Optional[str] = None
    item_category_name: Optional[str] = None
    item_name: Optional[str] = None
    serial_no: Optional[str] = None
    condition: Optional[str] = None
    assigned_to: Optional[str] = None
