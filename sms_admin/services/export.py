"""CSV export of table views."""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel

QUOTE_TRIGGERS = (",", '"', "\n", "\r")


@dataclass(frozen=True)
class CsvColumn:
    """Record key and the header label it is exported under."""

    key: str
    label: str


ColumnSpec = CsvColumn | tuple[str, str] | Mapping[str, str]


def _as_column(spec: ColumnSpec) -> CsvColumn:
    if isinstance(spec, CsvColumn):
        return spec
    if isinstance(spec, Mapping):
        return CsvColumn(key=spec["key"], label=spec["label"])
    key, label = spec
    return CsvColumn(key=key, label=label)


def stringify(value: Any) -> str:
    """Render a field value as CSV text (before quoting)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return stringify(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    return str(value)


def escape_field(text: str) -> str:
    """Quote a field if it contains a comma, quote or line break."""
    if any(trigger in text for trigger in QUOTE_TRIGGERS):
        return '"' + text.replace('"', '""') + '"'
    return text


def _row_values(record: Any) -> Mapping[str, Any]:
    if isinstance(record, BaseModel):
        # Dump by field name; mode="python" keeps enums and datetimes intact
        return record.model_dump()
    return record


def generate_csv(
    records: Iterable[Any],
    columns: Sequence[ColumnSpec],
) -> str:
    """Serialize records into CSV text.

    The first line holds the column labels, then one line per record with the
    values in column order. Lines are separated by ``\\n`` with no trailing
    newline. Missing keys and None export as empty fields.

    Args:
        records: Mappings or pydantic models
        columns: Ordered column specs (CsvColumn, (key, label) or
            {"key": ..., "label": ...})

    Returns:
        CSV text
    """
    cols = [_as_column(c) for c in columns]
    lines = [",".join(escape_field(c.label) for c in cols)]
    for record in records:
        values = _row_values(record)
        lines.append(
            ",".join(escape_field(stringify(values.get(c.key))) for c in cols)
        )
    return "\n".join(lines)


# ==================== Column Sets ====================

LOG_COLUMNS = [
    CsvColumn("created_at", "Date"),
    CsvColumn("org_id", "Organization"),
    CsvColumn("direction", "Direction"),
    CsvColumn("phone_number", "Phone Number"),
    CsvColumn("sms_template_id", "Template"),
    CsvColumn("status", "Status"),
    CsvColumn("body", "Message"),
    CsvColumn("failure_reason", "Failure Reason"),
]

SUPPRESSION_COLUMNS = [
    CsvColumn("phone_number", "Phone Number"),
    CsvColumn("org_id", "Organization"),
    CsvColumn("suppression_scope", "Scope"),
    CsvColumn("reason", "Reason"),
    CsvColumn("source", "Source"),
    CsvColumn("created_at", "Created"),
]

AUDIT_COLUMNS = [
    CsvColumn("timestamp", "Timestamp"),
    CsvColumn("action", "Action"),
    CsvColumn("entity_type", "Entity Type"),
    CsvColumn("entity_name", "Entity"),
    CsvColumn("user_name", "User"),
    CsvColumn("details", "Details"),
]
