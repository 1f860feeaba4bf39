"""Tests for API routes."""

import json

from fastapi.testclient import TestClient

from tracker.core.config import settings
from tracker.services.workspace import Workspace


def customer_payload(name="Asha", email="asha@example.com", phone="9000000001", **extra):
    return {"values": {"name": name, "email": email, "phone": phone}, **extra}


class TestHealthEndpoint:
    def test_health_check(self, client: TestClient):
        """Test the health endpoint returns OK."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCustomerRoutes:
    def test_create_customer(self, client: TestClient):
        response = client.post("/customers", json=customer_payload(amount="250"))
        assert response.status_code == 201

        data = response.json()
        assert data["joinId"] == "CUS-01"
        assert data["status"] == "new"
        assert data["amount"] == "250"
        assert "createdAt" in data

    def test_create_accepts_flat_field_values(self, client: TestClient):
        response = client.post("/customers", json={"name": "Asha", "email": "a@x", "phone": "1"})
        assert response.status_code == 201
        assert response.json()["values"] == {"name": "Asha", "email": "a@x", "phone": "1"}

    def test_identity_keys_in_body_are_ignored(self, client: TestClient):
        data = client.post("/customers", json=customer_payload(joinId="CUS-99", id="forged")).json()
        assert data["joinId"] == "CUS-01"
        assert data["id"] != "forged"

        data = client.patch(f"/customers/{data['id']}", json={"joinId": "CUS-77"}).json()
        assert data["customer"]["joinId"] == "CUS-01"
        assert data["customer"]["values"] == {"name": "Asha", "email": "asha@example.com", "phone": "9000000001"}

    def test_duplicate_customer_conflicts(self, client: TestClient):
        client.post("/customers", json=customer_payload())
        response = client.post("/customers", json=customer_payload())
        assert response.status_code == 409
        assert "already exists" in response.json()["detail"]

    def test_invalid_status_is_rejected(self, client: TestClient):
        response = client.post("/customers", json=customer_payload(status="archived"))
        assert response.status_code == 422

    def test_list_views(self, client: TestClient, sample_customers):
        data = client.get("/customers").json()
        assert [c["joinId"] for c in data["customers"]] == ["CUS-01", "CUS-02", "CUS-03"]
        assert data["summary"]["total"] == 350
        assert data["summary"]["paid"] == 100

        active = client.get("/customers", params={"active": True}).json()
        assert [c["joinId"] for c in active["customers"]] == ["CUS-01", "CUS-02"]

        completed = client.get("/customers", params={"status": "completed"}).json()
        assert [c["joinId"] for c in completed["customers"]] == ["CUS-03"]

        found = client.get("/customers", params={"search": "ben"}).json()
        assert [c["joinId"] for c in found["customers"]] == ["CUS-02"]

    def test_summary(self, client: TestClient, sample_customers):
        data = client.get("/customers/summary", params={"status": "in-progress"}).json()
        assert data["total"] == 250
        assert data["total_display"] == "₹250.00"

    def test_detail_and_404(self, client: TestClient, sample_customers):
        response = client.get(f"/customers/{sample_customers[0].id}")
        assert response.status_code == 200
        assert response.json()["joinId"] == "CUS-01"

        assert client.get("/customers/nope").status_code == 404

    def test_patch_customer(self, client: TestClient, sample_customers):
        customer = sample_customers[0]
        response = client.patch(f"/customers/{customer.id}", json={"priority": "urgent", "paid": True})
        data = response.json()
        assert data["updated"] is True
        assert data["customer"]["priority"] == "urgent"
        assert data["customer"]["paid"] is True

    def test_patch_and_delete_unknown_are_no_ops(self, client: TestClient, workspace: Workspace, sample_customers):
        response = client.patch("/customers/nonexistent", json={"status": "completed"})
        assert response.status_code == 200
        assert response.json() == {"updated": False, "customer": None}

        response = client.delete("/customers/nonexistent")
        assert response.json() == {"deleted": False}
        assert len(workspace.customers.customers) == 3

    def test_delete_customer(self, client: TestClient, workspace: Workspace, sample_customers):
        response = client.delete(f"/customers/{sample_customers[0].id}")
        assert response.json() == {"deleted": True}
        assert len(workspace.customers.customers) == 2

    def test_workflow_moves(self, client: TestClient, sample_customers):
        customer_id = sample_customers[0].id

        response = client.post(f"/customers/{customer_id}/status", json={"status": "in-progress"})
        assert response.json()["status"] == "in-progress"

        response = client.post(f"/customers/{customer_id}/toggle-paid")
        assert response.json()["paid"] is True

        assert client.post("/customers/nope/toggle-paid").status_code == 404

    def test_customer_checklist(self, client: TestClient, sample_customers):
        customer_id = sample_customers[0].id

        data = client.post(f"/customers/{customer_id}/checklist", json={"text": "Measure"}).json()
        item_id = data["checklist"][0]["id"]

        data = client.post(f"/customers/{customer_id}/checklist/{item_id}/toggle").json()
        assert data["checklist"][0]["completed"] is True

        data = client.put(f"/customers/{customer_id}/checklist/title", json={"title": "Visit"}).json()
        assert data["checklistTitle"] == "Visit"

        assert client.post(f"/customers/{customer_id}/checklist/missing/toggle").status_code == 404

        data = client.delete(f"/customers/{customer_id}/checklist/{item_id}").json()
        assert data["checklist"] == []


class TestFieldRoutes:
    def test_list_and_create(self, client: TestClient):
        assert [f["name"] for f in client.get("/fields").json()] == ["name", "email", "phone"]

        response = client.post("/fields", json={"name": "service", "type": "select", "options": ["A", "B"]})
        assert response.status_code == 201
        assert response.json()["options"] == ["A", "B"]

    def test_reserved_name(self, client: TestClient):
        response = client.post("/fields", json={"name": "status"})
        assert response.status_code == 400

    def test_update_and_delete(self, client: TestClient):
        field_id = client.get("/fields").json()[2]["id"]

        data = client.patch(f"/fields/{field_id}", json={"type": "tel"}).json()
        assert data["updated"] is True
        assert data["field"]["type"] == "tel"

        assert client.patch(f"/fields/{field_id}", json={"name": "email"}).status_code == 400
        assert client.delete(f"/fields/{field_id}").json() == {"deleted": True}
        assert client.delete(f"/fields/{field_id}").json() == {"deleted": False}


class TestTemplateRoutes:
    def test_default_template_protection(self, client: TestClient):
        default_id = client.get("/templates").json()[0]["id"]

        response = client.delete(f"/templates/{default_id}")
        assert response.status_code == 400

        data = client.patch(f"/templates/{default_id}", json={"name": "Renamed"}).json()
        assert data["template"]["name"] == "Default Template"
        assert data["message"] == "Default template name cannot be changed."

    def test_create_update_delete(self, client: TestClient):
        response = client.post("/templates", json={"name": "Invoice", "header": "A\nB"})
        assert response.status_code == 201
        template = response.json()
        assert template["isDefault"] is False

        data = client.patch(f"/templates/{template['id']}", json={"name": "Receipt"}).json()
        assert data["template"]["name"] == "Receipt"
        assert "message" not in data

        assert client.delete(f"/templates/{template['id']}").json() == {"deleted": True}
        assert len(client.get("/templates").json()) == 1

    def test_blank_name_is_rejected(self, client: TestClient):
        assert client.post("/templates", json={"name": " "}).status_code == 400


class TestChecklistRoutes:
    def test_entry_checklist_and_submit(self, client: TestClient):
        client.put("/entry/title", json={"title": "Visit"})
        state = client.post("/entry/items", json={"text": "Measure"}).json()
        item_id = state["checklist"][0]["id"]

        state = client.post(f"/entry/items/{item_id}/toggle").json()
        assert state["completed_count"] == 1
        assert state["total_count"] == 1

        response = client.post("/entry/submit", json=customer_payload())
        assert response.status_code == 201
        assert response.json()["checklistTitle"] == "Visit"
        assert response.json()["checklist"][0]["text"] == "Measure"

        assert client.get("/entry").json()["total_count"] == 0

    def test_saved_checklists(self, client: TestClient):
        assert client.post("/checklists").status_code == 400

        client.post("/entry/items", json={"text": "Measure"})
        client.put("/entry/title", json={"title": "Install"})
        assert client.post("/checklists").status_code == 201

        saved = client.get("/checklists").json()
        assert saved == [{"index": 0, "title": "Install", "items": ["Measure"]}]

        state = client.post("/checklists/0/use").json()
        assert state["title"] == "Install"
        assert client.post("/checklists/3/use").status_code == 404

        assert client.delete("/checklists/0").json() == {"deleted": True}
        assert client.delete("/checklists/0").json() == {"deleted": False}


class TestPreferenceRoutes:
    def test_get_and_save(self, client: TestClient):
        data = client.get("/preferences").json()
        assert data["print_fields"] == ["name", "email", "phone"]
        assert data["show_join_id"] is False

        data = client.put("/preferences", json={"print_fields": ["name", "payment"], "show_join_id": True}).json()
        assert data["print_fields"] == ["name", "payment"]
        assert data["show_join_id"] is True

    def test_unknown_print_field(self, client: TestClient):
        response = client.put("/preferences", json={"print_fields": ["shoe size"]})
        assert response.status_code == 400


class TestDataRoutes:
    def test_export_download(self, client: TestClient, sample_customers):
        response = client.get("/data/export")
        assert response.status_code == 200
        assert "customer-database-export.json" in response.headers["content-disposition"]
        assert len(response.json()["customers"]) == 3

    def test_import_upload(self, client: TestClient, workspace: Workspace, sample_customers):
        exported = client.get("/data/export").content
        workspace.customers.delete(sample_customers[0].id)

        response = client.post(
            "/data/import", files={"file": ("export.json", exported, "application/json")}
        )

        assert response.status_code == 200
        assert response.json()["imported"]["customers"] == 3
        assert len(workspace.customers.customers) == 3

    def test_import_rejections(self, client: TestClient, workspace: Workspace, monkeypatch):
        response = client.post("/data/import", files={"file": ("x.json", b"{oops", "application/json")})
        assert response.status_code == 400

        monkeypatch.setattr(settings, "import_max_bytes", 10)
        payload = json.dumps({"customers": [], "fields": [], "templates": []}).encode()
        response = client.post("/data/import", files={"file": ("x.json", payload, "application/json")})
        assert response.status_code == 413
        assert "exceeds storage limit" in response.json()["detail"]
        assert len(workspace.fields.fields) == 3

    def test_usage(self, client: TestClient):
        data = client.get("/data/usage").json()
        assert data["total"] == 50 * 1024 * 1024
        assert data["used"] > 0
