"""Integration tests for template and report endpoints."""

import uuid
from datetime import timedelta

TEMPLATE = {"name": "Monthly P&L", "report_type": "profit_loss", "category": "financial", "output_formats": ["pdf", "excel"]}


def _report_body(**overrides) -> dict:
    body = {
        "title": "January Report",
        "report_type": "profit_loss",
        "parameters": {"date_from": "2024-01-01", "date_to": "2024-01-31", "output_format": "excel"},
    }
    body.update(overrides)
    return body


async def _generated(client, run_worker, **overrides) -> str:
    report_id = (await client.post("/api/reports/generate", json=_report_body(**overrides))).json()["id"]
    await run_worker(report_id)
    return report_id


class TestTemplatesAPI:
    async def test_create_and_list(self, client):
        res = await client.post("/api/templates", json=TEMPLATE)
        assert res.status_code == 201
        created = res.json()
        assert created["usage_count"] == 0
        assert created["output_formats"] == ["pdf", "excel"]

        res = await client.get("/api/templates")
        assert res.status_code == 200
        assert [t["id"] for t in res.json()] == [created["id"]]

    async def test_other_tenant_sees_nothing(self, client):
        await client.post("/api/templates", json=TEMPLATE)
        res = await client.get("/api/templates", headers={"X-Tenant-ID": "tenant-b"})
        assert res.json() == []

    async def test_invalid_category_rejected(self, client):
        res = await client.post("/api/templates", json={**TEMPLATE, "category": "astrology"})
        assert res.status_code == 422

    async def test_missing_tenant_header(self, client):
        client.headers.pop("X-Tenant-ID")
        res = await client.get("/api/templates")
        assert res.status_code == 422


class TestGenerateAPI:
    async def test_generate_queues_pending_report(self, client, generate_task):
        res = await client.post("/api/reports/generate", json=_report_body())
        assert res.status_code == 202
        data = res.json()
        assert data["status"] == "pending"
        generate_task.delay.assert_called_once_with(data["id"], "tenant-a")

    async def test_worker_completes_queued_report(self, client, run_worker):
        report_id = (await client.post("/api/reports/generate", json=_report_body())).json()["id"]

        report = await run_worker(report_id)

        assert report.status == "completed"
        res = await client.get(f"/api/reports/{report_id}/status")
        assert res.json()["status"] == "completed"

    async def test_generate_with_template_updates_usage(self, client, run_worker):
        template_id = (await client.post("/api/templates", json=TEMPLATE)).json()["id"]

        await _generated(client, run_worker, template_id=template_id)

        templates = (await client.get("/api/templates")).json()
        assert templates[0]["usage_count"] == 1
        assert templates[0]["last_used_at"] is not None

    async def test_unknown_template_404(self, client, generate_task):
        res = await client.post("/api/reports/generate", json=_report_body(template_id=str(uuid.uuid4())))
        assert res.status_code == 404
        assert "not found" in res.json()["detail"]
        generate_task.delay.assert_not_called()

    async def test_future_report_is_scheduled(self, client, clock, generate_task):
        when = (clock.now() + timedelta(hours=3)).isoformat()
        res = await client.post("/api/reports/generate", json=_report_body(scheduled_for=when))
        assert res.status_code == 202
        assert res.json()["status"] == "scheduled"
        generate_task.delay.assert_not_called()

    async def test_inverted_dates_rejected(self, client):
        body = _report_body(parameters={"date_from": "2024-02-01", "date_to": "2024-01-01"})
        res = await client.post("/api/reports/generate", json=body)
        assert res.status_code == 422

        assert (await client.get("/api/reports")).json() == []


class TestStatusAPI:
    async def test_status_of_completed_report(self, client, run_worker):
        report_id = await _generated(client, run_worker)

        res = await client.get(f"/api/reports/{report_id}/status")
        assert res.status_code == 200
        data = res.json()
        assert data["status"] == "completed"
        assert [f["format"] for f in data["output_files"]] == ["pdf", "excel"]
        assert data["error_message"] is None

    async def test_invalid_id_400(self, client):
        res = await client.get("/api/reports/not-a-uuid/status")
        assert res.status_code == 400

    async def test_unknown_id_404(self, client):
        res = await client.get(f"/api/reports/{uuid.uuid4()}/status")
        assert res.status_code == 404

    async def test_other_tenant_cannot_read(self, client):
        report_id = (await client.post("/api/reports/generate", json=_report_body())).json()["id"]
        res = await client.get(f"/api/reports/{report_id}/status", headers={"X-Tenant-ID": "tenant-b"})
        assert res.status_code == 404

    async def test_list_reports(self, client, run_worker):
        await _generated(client, run_worker)
        res = await client.get("/api/reports")
        assert res.status_code == 200
        reports = res.json()
        assert len(reports) == 1
        assert reports[0]["generation_time"] is not None
        assert reports[0]["data_hash"] is not None


class TestRunAPI:
    async def test_pending_report_requeued(self, client, generate_task):
        report_id = (await client.post("/api/reports/generate", json=_report_body())).json()["id"]
        generate_task.delay.reset_mock()

        res = await client.post(f"/api/reports/{report_id}/run")
        assert res.status_code == 202
        assert res.json()["status"] == "pending"
        generate_task.delay.assert_called_once_with(report_id, "tenant-a")

    async def test_rerun_completed_conflicts(self, client, run_worker, generate_task):
        report_id = await _generated(client, run_worker)
        generate_task.delay.reset_mock()

        res = await client.post(f"/api/reports/{report_id}/run")
        assert res.status_code == 409
        generate_task.delay.assert_not_called()

    async def test_scheduled_report_conflicts(self, client, clock):
        when = (clock.now() + timedelta(days=1)).isoformat()
        report_id = (await client.post("/api/reports/generate", json=_report_body(scheduled_for=when))).json()["id"]

        res = await client.post(f"/api/reports/{report_id}/run")
        assert res.status_code == 409

    async def test_unknown_report_404(self, client):
        res = await client.post(f"/api/reports/{uuid.uuid4()}/run")
        assert res.status_code == 404


class TestDownloadAPI:
    async def test_download_excel(self, client, run_worker):
        report_id = await _generated(client, run_worker)

        res = await client.get(f"/api/reports/{report_id}/download")
        assert res.status_code == 200
        assert res.headers["content-type"].startswith("application/vnd.openxmlformats")
        assert "January_Report_20240115103000.xlsx" in res.headers["content-disposition"]
        assert len(res.content) > 0

    async def test_download_without_excel_404(self, client, run_worker):
        params = {"date_from": "2024-01-01", "date_to": "2024-01-31"}
        report_id = await _generated(client, run_worker, parameters=params)

        res = await client.get(f"/api/reports/{report_id}/download")
        assert res.status_code == 404

    async def test_download_pending_400(self, client):
        report_id = (await client.post("/api/reports/generate", json=_report_body())).json()["id"]

        res = await client.get(f"/api/reports/{report_id}/download")
        assert res.status_code == 400

    async def test_download_scheduled_400(self, client, clock):
        when = (clock.now() + timedelta(days=1)).isoformat()
        report_id = (await client.post("/api/reports/generate", json=_report_body(scheduled_for=when))).json()["id"]

        res = await client.get(f"/api/reports/{report_id}/download")
        assert res.status_code == 400


class TestHealth:
    async def test_health(self, client):
        res = await client.get("/api/health")
        assert res.status_code == 200
        assert res.json()["status"] == "ok"
