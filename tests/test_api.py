"""Tests for the admin API routes."""

import pytest


# ==================== Dashboard & Search ====================


@pytest.mark.asyncio
async def test_dashboard(client):
    """Test headline counts and overall stats."""
    response = await client.get("/dashboard")
    assert response.status_code == 200

    data = response.json()
    assert data["totalOrganizations"] == 5
    assert data["smsEnabledOrganizations"] == 2
    assert data["smsReadyOrganizations"] == 2
    assert data["totalTemplates"] == 6
    assert data["activeTemplates"] == 5
    assert data["deliveryStats"]["total"] == 12
    assert data["deliveryStats"]["deliveryRate"] == 60
    assert data["deliveryStats"]["failureRate"] == 20
    assert len(data["recentLogs"]) == 10
    assert data["recentLogs"][0]["id"] == "log-8"


@pytest.mark.asyncio
async def test_search(client):
    """Test global search."""
    response = await client.get("/search", params={"q": "acme"})
    assert response.status_code == 200

    results = response.json()
    assert results[0] == {
        "type": "org",
        "id": "org-1",
        "title": "Acme Realty Group",
        "subtitle": "US · SMS Enabled",
    }


@pytest.mark.asyncio
async def test_blank_search(client):
    """Test that a blank query returns nothing."""
    response = await client.get("/search", params={"q": " "})
    assert response.status_code == 200
    assert response.json() == []


# ==================== Organizations ====================


@pytest.mark.asyncio
async def test_list_organizations(client):
    """Test listing organizations with a filter."""
    response = await client.get("/orgs", params={"sms_enabled": "true"})
    assert response.status_code == 200
    assert {o["id"] for o in response.json()} == {"org-1", "org-2"}


@pytest.mark.asyncio
async def test_organization_detail(client):
    """Test the organization view."""
    response = await client.get("/orgs/org-1")
    assert response.status_code == 200

    data = response.json()
    assert data["organization"]["name"] == "Acme Realty Group"
    assert data["organization"]["smsEnabled"] is True
    assert data["deliveryStats"]["total"] == 6
    assert data["deliveryStats"]["deliveryRate"] == 60
    assert data["suppressionCount"] == 1
    assert data["health"] == {"score": 79, "label": "Good", "color": "blue"}
    assert data["quietHours"]["id"] == "qh-1"
    assert data["provisioningJob"]["id"] == "prov-2"
    assert data["readinessIssues"] == []

    templates = {t["template"]["id"]: t for t in data["templates"]}
    assert len(templates) == 6
    assert templates["tpl-1"]["hasOverride"] is True
    assert templates["tpl-2"]["hasOverride"] is False
    assert templates["tpl-2"]["effectiveBody"] == templates["tpl-2"]["template"]["defaultBody"]
    assert templates["tpl-3"]["override"]["id"] == "override-5"


@pytest.mark.asyncio
async def test_organization_not_found(client):
    """Test the error body for a missing organization."""
    response = await client.get("/orgs/missing")
    assert response.status_code == 404

    data = response.json()
    assert data["error"] == "ORGANIZATION_NOT_FOUND"
    assert data["details"] == {"org_id": "missing"}


@pytest.mark.asyncio
async def test_toggle_sms_records_audit(client):
    """Test enabling SMS and the resulting audit entry."""
    response = await client.post("/orgs/org-4/sms", json={"enabled": True})
    assert response.status_code == 200
    assert response.json()["smsEnabled"] is True

    response = await client.get("/audit", params={"action": "TOGGLE"})
    entry = response.json()[0]
    assert entry["entityId"] == "org-4"
    assert entry["userName"] == "Sarah Admin"
    assert entry["changes"] == [{"field": "smsEnabled", "oldValue": "false", "newValue": "true"}]


# ==================== Overrides ====================


@pytest.mark.asyncio
async def test_get_override(client):
    """Test reading an override with its effective body."""
    response = await client.get("/orgs/org-1/templates/tpl-2/override")
    assert response.status_code == 200

    data = response.json()
    assert data["override"]["id"] == "override-2"
    assert data["override"]["isActive"] is False
    assert data["effectiveBody"] == data["template"]["defaultBody"]


@pytest.mark.asyncio
async def test_override_lifecycle(client):
    """Test creating, updating and deleting an override."""
    url = "/orgs/org-3/templates/tpl-1/override"

    response = await client.put(url, json={"overrideBody": "Metro: {{first_name}}"})
    assert response.status_code == 201
    override_id = response.json()["id"]

    response = await client.put(url, json={"overrideBody": "Metro v2", "isActive": True})
    assert response.status_code == 200
    assert response.json()["id"] == override_id
    assert response.json()["overrideBody"] == "Metro v2"

    response = await client.get(url)
    assert response.json()["effectiveBody"] == "Metro v2"

    response = await client.delete(url)
    assert response.status_code == 204

    response = await client.delete(url)
    assert response.status_code == 404

    response = await client.get("/audit", params={"entity_type": "OVERRIDE"})
    actions = [e["action"] for e in response.json() if e["entityId"] == override_id]
    assert actions == ["DELETE", "UPDATE", "CREATE"]


@pytest.mark.asyncio
async def test_override_requires_body(client):
    """Test that an empty override body is rejected."""
    response = await client.put(
        "/orgs/org-3/templates/tpl-1/override", json={"overrideBody": ""}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_override_unknown_template(client):
    """Test overriding a template that does not exist."""
    response = await client.put(
        "/orgs/org-1/templates/missing/override", json={"overrideBody": "x"}
    )
    assert response.status_code == 404
    assert response.json()["error"] == "TEMPLATE_NOT_FOUND"


@pytest.mark.asyncio
async def test_preview(client):
    """Test rendering a preview with sample and caller values."""
    response = await client.get("/orgs/org-1/templates/tpl-5/preview")
    assert response.status_code == 200

    data = response.json()
    assert data["hasOverride"] is False
    assert data["body"] == "Your verification code is 123456. It expires in 10 minutes."
    assert data["characterCount"] == len(data["body"])
    assert data["segmentCount"] == 1

    response = await client.get("/orgs/org-1/templates/tpl-5/preview", params={"code": "999"})
    assert response.json()["body"] == "Your verification code is 999. It expires in 10 minutes."


# ==================== Provisioning & Quiet Hours ====================


@pytest.mark.asyncio
async def test_trigger_provisioning(client):
    """Test triggering provisioning for an organization."""
    response = await client.post("/orgs/org-5/provisioning")
    assert response.status_code == 201

    job = response.json()
    assert job["orgId"] == "org-5"
    assert job["status"] == "PENDING"
    assert len(job["steps"]) == 5

    response = await client.get("/orgs/org-5/provisioning")
    assert [j["id"] for j in response.json()] == [job["id"]]


@pytest.mark.asyncio
async def test_quiet_hours(client):
    """Test reading and updating quiet hours."""
    response = await client.get("/orgs/org-5/quiet-hours")
    assert response.status_code == 200
    assert response.json() is None

    response = await client.put(
        "/orgs/org-5/quiet-hours",
        json={"enabled": True, "timezone": "America/Chicago", "daysOfWeek": [6, 0]},
    )
    assert response.status_code == 200

    data = response.json()
    assert data["enabled"] is True
    assert data["timezone"] == "America/Chicago"
    assert data["daysOfWeek"] == [0, 6]
    assert data["startTime"] == "21:00"


@pytest.mark.asyncio
async def test_quiet_hours_validation(client):
    """Test that invalid quiet hours are rejected."""
    response = await client.put("/orgs/org-1/quiet-hours", json={"startTime": "25:00"})
    assert response.status_code == 422

    response = await client.put("/orgs/org-1/quiet-hours", json={"timezone": "Nowhere/Else"})
    assert response.status_code == 422


# ==================== Templates ====================


@pytest.mark.asyncio
async def test_list_templates(client):
    """Test listing active templates."""
    response = await client.get("/templates", params={"active": "true"})
    assert response.status_code == 200
    assert len(response.json()) == 5


@pytest.mark.asyncio
async def test_update_template(client):
    """Test editing a template records a version and an audit entry."""
    response = await client.patch(
        "/templates/tpl-1",
        json={"name": "Equity Alert", "changeNote": "Shorter name"},
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Equity Alert"

    response = await client.get("/templates/tpl-1/versions")
    versions = response.json()
    assert [v["version"] for v in versions] == [4, 3, 2, 1]
    assert versions[0]["changeNote"] == "Shorter name"

    response = await client.get("/audit", params={"entity_type": "TEMPLATE"})
    [entry] = response.json()
    assert entry["action"] == "UPDATE"
    assert entry["changes"] == [
        {"field": "name", "oldValue": "Home Equity Change Alert", "newValue": "Equity Alert"}
    ]


@pytest.mark.asyncio
async def test_update_template_without_changes(client):
    """Test that an edit with no fields is rejected."""
    response = await client.patch("/templates/tpl-1", json={"changeNote": "Nothing"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_template_rejects_null_fields(client):
    """Test that null for a required template field is a validation error."""
    for body in ({"isActive": None}, {"name": None}, {"type": None}):
        response = await client.patch("/templates/tpl-1", json=body)
        assert response.status_code == 422

    response = await client.get("/templates/tpl-1/versions")
    assert len(response.json()) == 3


@pytest.mark.asyncio
async def test_update_template_clears_description(client):
    """Test that null clears an optional field."""
    response = await client.patch("/templates/tpl-1", json={"description": None})
    assert response.status_code == 200
    assert response.json()["description"] is None

@pytest.mark.asyncio
async def test_template_not_found(client):
    """Test reading a missing template."""
    response = await client.get("/templates/missing")
    assert response.status_code == 404
    assert response.json()["error"] == "TEMPLATE_NOT_FOUND"


# ==================== Activity ====================


@pytest.mark.asyncio
async def test_list_logs(client):
    """Test log filters over HTTP."""
    response = await client.get("/logs", params={"org_id": "org-1", "status": "FAILED"})
    assert response.status_code == 200
    assert [log["id"] for log in response.json()] == ["log-3"]


@pytest.mark.asyncio
async def test_export_logs(client):
    """Test CSV export of message logs."""
    response = await client.get("/logs/export", params={"org_id": "org-1"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")

    lines = response.text.split("\n")
    assert lines[0] == "Date,Organization,Direction,Phone Number,Template,Status,Message,Failure Reason"
    assert len(lines) == 7
    assert '"Hi John, this is a message from your agent."' in lines[1]


@pytest.mark.asyncio
async def test_export_suppressions(client):
    """Test CSV export of suppressions."""
    response = await client.get("/suppressions/export", params={"org_id": "org-2"})
    lines = response.text.split("\n")
    assert lines[0] == "Phone Number,Organization,Scope,Reason,Source,Created"
    assert len(lines) == 3


@pytest.mark.asyncio
async def test_export_audit(client):
    """Test CSV export of the audit log."""
    response = await client.get("/audit/export")
    lines = response.text.split("\n")
    assert lines[0] == "Timestamp,Action,Entity Type,Entity,User,Details"
    assert len(lines) == 5
    assert ",TRIGGER,PROVISIONING,Pacific Home Loans,Mike Support," in lines[3]


@pytest.mark.asyncio
async def test_duplicate_override_conflict(client, storage, monkeypatch):
    """Test that a create racing an existing override returns 409."""

    async def no_existing(org_id, template_id):
        return None

    monkeypatch.setattr(storage, "get_override_for_template", no_existing)

    response = await client.put(
        "/orgs/org-1/templates/tpl-1/override", json={"overrideBody": "Again"}
    )
    assert response.status_code == 409

    data = response.json()
    assert data["error"] == "DUPLICATE_OVERRIDE"
    assert data["details"]["existing_override_id"] == "override-1"
