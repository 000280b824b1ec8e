"""Tests for the CSV export script."""

import importlib.util
from pathlib import Path

import pytest

from sms_admin.services.export import AUDIT_COLUMNS, LOG_COLUMNS

SCRIPT = Path(__file__).parent.parent / "scripts" / "export_csv.py"


@pytest.fixture
def export_script():
    """Load the export script as a module."""
    spec = importlib.util.spec_from_file_location("export_csv", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.mark.asyncio
async def test_logs_filtered_by_org(export_script, storage):
    """Test that log exports honour the organization filter."""
    records, columns = await export_script.load_rows(storage, "logs", "org-1")
    assert columns == LOG_COLUMNS
    assert len(records) == 6
    assert all(r.org_id == "org-1" for r in records)


@pytest.mark.asyncio
async def test_audit_export_includes_every_entry(export_script, storage):
    """Test that audit exports are not filtered by entity id."""
    records, columns = await export_script.load_rows(storage, "audit", None)
    assert columns == AUDIT_COLUMNS
    assert {e.id for e in records} == {"audit-1", "audit-2", "audit-3", "audit-4"}


@pytest.mark.asyncio
async def test_audit_export_rejects_org_filter(export_script, storage):
    """Test that an organization filter on the audit log is refused."""
    with pytest.raises(ValueError):
        await export_script.load_rows(storage, "audit", "org-1")
