"""Route tests for the /channel endpoints using in-memory clients."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from tests.fakes import MemoryIndexClient, definition_buckets
from zeebe_ops.api.app import create_app
from zeebe_ops.core.exceptions import CommandRejectedError, IndexQueryError

INCIDENT = {"key": 101, "jobKey": 102, "elementInstanceKey": 103, "newRetries": 2}


@pytest.fixture
def client(settings, commands, index):
    app = create_app(settings, commands=commands, index=index)
    with TestClient(app) as c:
        yield c


class TestStartWorkflow:
    def test_starts_latest_version_with_body_variables(self, client, commands):
        resp = client.post("/channel/workflow/payer-usa", json={"amount": 100})
        assert resp.status_code == 204
        assert resp.content == b""
        assert commands.calls_to("create-instance") == [("payer-usa", {"amount": 100})]

    def test_non_object_body_is_client_error(self, client, commands):
        resp = client.post("/channel/workflow/payer-usa", json=[1, 2])
        assert resp.status_code == 422
        assert commands.calls == []

    def test_remote_failure_is_upstream_error(self, client, commands):
        commands.fail("create-instance", "payer-usa", CommandRejectedError("create-instance", "NOT_FOUND"))
        resp = client.post("/channel/workflow/payer-usa", json={})
        assert resp.status_code == 502
        assert resp.json() == {"error": "NOT_FOUND", "command": "create-instance"}


class TestBulkCancel:
    def test_partial_failure_report(self, client, commands):
        commands.fail("cancel-instance", 2)
        resp = client.put("/channel/workflow", json={"processId": [1, 2, 3]})
        assert resp.status_code == 200
        assert resp.json() == {
            "success": [1, 3],
            "failed": [2],
            "cancellationSuccessful": 2,
            "cancellationFailed": 1,
        }

    def test_numeric_strings_are_accepted(self, client, commands):
        resp = client.put("/channel/workflow", json={"processId": ["2251799813685249", 7]})
        assert resp.json()["success"] == [2251799813685249, 7]

    def test_non_numeric_id_is_client_error(self, client, commands):
        resp = client.put("/channel/workflow", json={"processId": ["abc"]})
        assert resp.status_code == 422
        assert commands.calls == []

    def test_out_of_range_id_is_client_error(self, client):
        resp = client.put("/channel/workflow", json={"processId": [2**63]})
        assert resp.status_code == 422

    def test_missing_field_is_client_error(self, client):
        resp = client.put("/channel/workflow", json={"ids": [1]})
        assert resp.status_code == 422


class TestCancelInstance:
    def test_cancels_by_path_key(self, client, commands):
        resp = client.post("/channel/workflow/2251799813685249/cancel")
        assert resp.status_code == 204
        assert commands.calls_to("cancel-instance") == [(2251799813685249,)]

    def test_non_numeric_key_is_client_error(self, client, commands):
        resp = client.post("/channel/workflow/not-a-key/cancel")
        assert resp.status_code == 422
        assert commands.calls == []

    def test_key_beyond_int64_is_client_error(self, client, commands):
        resp = client.post(f"/channel/workflow/{2**64}/cancel")
        assert resp.status_code == 422
        assert commands.calls == []


class TestProcessDefinitions:
    def test_returns_name_to_keys(self, client, index):
        index.aggregations = definition_buckets({"procA": [100, 200], "procB": [300]})
        resp = client.get("/channel/process")
        assert resp.status_code == 200
        assert resp.json() == {"procA": [100, 200], "procB": [300]}

    def test_index_failure_is_upstream_error(self, client, index):
        index.error = IndexQueryError("search timed out")
        resp = client.get("/channel/process")
        assert resp.status_code == 502
        assert resp.json() == {"error": "search timed out"}


class TestTransactionResolve:
    def test_publishes_recovery_message(self, client, commands):
        resp = client.post("/channel/transaction/tx-42/resolve", json={"errorCode": None, "ok": True})
        assert resp.status_code == 204
        assert commands.calls_to("publish-message") == [
            ("operator-manual-recovery", "tx-42", 30_000, {"errorCode": None, "ok": True}),
        ]


class TestJobResolve:
    def test_runs_full_sequence(self, client, commands):
        resp = client.post("/channel/job/resolve", json={"incident": INCIDENT, "variables": {"v": 1}})
        assert resp.status_code == 204
        assert commands.commands == ["set-variables", "update-retries", "resolve-incident"]

    def test_missing_job_key_is_bad_request(self, client, commands):
        incident = {k: v for k, v in INCIDENT.items() if k != "jobKey"}
        resp = client.post("/channel/job/resolve", json={"incident": incident, "variables": {}})
        assert resp.status_code == 400
        assert commands.calls == []

    def test_retries_beyond_int32_rejected_before_any_call(self, client, commands):
        incident = {**INCIDENT, "newRetries": 2**40}
        resp = client.post("/channel/job/resolve", json={"incident": incident, "variables": {"v": 1}})
        assert resp.status_code == 422
        assert commands.calls == []

    def test_negative_retries_is_client_error(self, client, commands):
        incident = {**INCIDENT, "newRetries": -1}
        resp = client.post("/channel/job/resolve", json={"incident": incident, "variables": {}})
        assert resp.status_code == 422
        assert commands.calls == []

    def test_missing_variables_is_client_error(self, client):
        resp = client.post("/channel/job/resolve", json={"incident": INCIDENT})
        assert resp.status_code == 422

    def test_partial_resolution_is_reported(self, client, commands):
        commands.fail("update-retries", 102, CommandRejectedError("update-retries", "NOT_FOUND"))
        resp = client.post("/channel/job/resolve", json={"incident": INCIDENT, "variables": {}})
        assert resp.status_code == 502
        body = resp.json()
        assert body["incidentKey"] == 101
        assert body["completedSteps"] == ["set-variables"]
        assert body["failedStep"] == "update-retries"
        assert "resolve-incident" not in commands.commands


class TestWorkflowResolve:
    def test_literal_path_is_not_treated_as_process_id(self, client, commands):
        resp = client.post("/channel/workflow/resolve", json={
            "incident": {"key": 101, "elementInstanceKey": 103},
            "variables": {"v": 1},
        })
        assert resp.status_code == 204
        assert commands.calls == [
            ("set-variables", (103, {"v": 1})),
            ("resolve-incident", (101,)),
        ]
        assert commands.calls_to("create-instance") == []


def test_clients_closed_on_shutdown(settings, commands, index):
    with TestClient(create_app(settings, commands=commands, index=index)):
        pass
    assert commands.closed and index.closed


def test_only_missing_client_is_built(settings, commands):
    built_index = MemoryIndexClient()
    with patch("zeebe_ops.api.app.create_command_client") as command_factory, \
            patch("zeebe_ops.api.app.create_index_client", return_value=built_index) as index_factory:
        with TestClient(create_app(settings, commands=commands)) as client:
            assert client.get("/es/health").json() == {"status": "UP"}
    command_factory.assert_not_called()
    index_factory.assert_called_once_with(settings)
    assert commands.closed and built_index.closed
