"""
Web API 통합 테스트

TestClient + 임시 SQLite DB + MockNotifier
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from adapters.mock.notifier import MockNotifier
from core.config.loader import Settings
from core.ledger.errors import (
    AccountReferenceError,
    JournalStateError,
    NotFoundError,
    PostingError,
)
from web.app import app, status_for
from web.dependencies import set_notifier

RENT = {
    "date": "2026-03-01",
    "description": "Office rent for March",
    "lines": [
        {"account_id": "acc-501", "amount": "1,200.00", "side": "debit"},
        {"account_id": "acc-101", "amount": "1,200.00", "side": "credit"},
    ],
}

FEE = {
    "date": "2026-03-05",
    "description": "Consulting fee",
    "lines": [
        {"account_id": "acc-101", "amount": 2000, "side": "debit"},
        {"account_id": "acc-401", "amount": 2000, "side": "credit"},
    ],
}


@pytest.fixture
def notifier() -> MockNotifier:
    return MockNotifier()


@pytest.fixture
def client(temp_config_file: Path, temp_dir: Path, notifier: MockNotifier):
    """sandbox 설정 + 임시 DB로 앱 기동"""
    Settings(temp_config_file)
    Settings.override_db_path(temp_dir / "api_test.db")
    set_notifier(notifier)
    with TestClient(app) as test_client:
        yield test_client
    set_notifier(None)


def _submit(client: TestClient, body: dict, user: str = "kim@example.com") -> dict:
    response = client.post("/api/journal-entries", json=body, headers={"X-User": user})
    assert response.status_code == 201, response.text
    return response.json()


class TestStatusMapping:
    """도메인 예외 → HTTP 상태 코드"""

    def test_mapping(self) -> None:
        assert status_for(NotFoundError("x")) == 404
        assert status_for(JournalStateError("x")) == 409
        assert status_for(PostingError("x")) == 500
        assert status_for(AccountReferenceError("x")) == 400


class TestHealth:
    """헬스 체크"""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["mode"] == "sandbox"
        assert data["company"] == "Test Books"


class TestAccountsApi:
    """계정과목 API"""

    def test_seeded_accounts(self, client: TestClient) -> None:
        response = client.get("/api/accounts")

        assert response.status_code == 200
        numbers = [a["number"] for a in response.json()]
        assert "101" in numbers
        assert "310" in numbers

    def test_create_and_get(self, client: TestClient) -> None:
        response = client.post(
            "/api/accounts",
            json={"name": "Petty Cash", "number": "102", "category": "Asset", "initial_balance": "250.00"},
            headers={"X-User": "admin@example.com"},
        )

        assert response.status_code == 201
        created = response.json()
        assert created["initial_balance"] == "250.00"
        assert created["created_by"] == "admin@example.com"

        fetched = client.get(f"/api/accounts/{created['id']}")
        assert fetched.json()["name"] == "Petty Cash"

    def test_create_invalid_number(self, client: TestClient) -> None:
        response = client.post(
            "/api/accounts",
            json={"name": "Misc", "number": "1e3", "category": "Asset"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "AccountError"

    def test_update_partial(self, client: TestClient) -> None:
        response = client.patch("/api/accounts/acc-101", json={"comment": "main account"})

        assert response.status_code == 200
        assert response.json()["comment"] == "main account"
        assert response.json()["name"] == "Cash"

    def test_deactivate(self, client: TestClient) -> None:
        response = client.post("/api/accounts/acc-120/deactivate")

        assert response.status_code == 200
        assert response.json()["active"] is False
        active = client.get("/api/accounts", params={"active_only": True}).json()
        assert "acc-120" not in [a["id"] for a in active]

    def test_deactivate_with_balance(self, client: TestClient) -> None:
        entry = _submit(client, FEE)
        client.post(f"/api/journal-entries/{entry['id']}/approve")

        response = client.post("/api/accounts/acc-101/deactivate")
        assert response.status_code == 400

    def test_missing_account(self, client: TestClient) -> None:
        response = client.get("/api/accounts/nope")

        assert response.status_code == 404
        assert response.json()["error"] == "NotFoundError"


class TestJournalApi:
    """분개 API"""

    def test_submit(self, client: TestClient, notifier: MockNotifier) -> None:
        entry = _submit(client, RENT)

        assert entry["status"] == "pending"
        assert entry["prepared_by"] == "kim@example.com"
        assert entry["total_debits"] == "1200.00"
        assert entry["lines"][0]["account_name"] == "Rent Expense"
        assert len(notifier.get_by_recipient("manager")) == 1

    def test_submit_invalid_returns_first_violation(self, client: TestClient) -> None:
        body = {**RENT, "description": ""}
        response = client.post("/api/journal-entries", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == "Description is required."

    def test_submit_unbalanced(self, client: TestClient) -> None:
        body = {
            **RENT,
            "lines": [
                {"account_id": "acc-501", "amount": "100.00", "side": "debit"},
                {"account_id": "acc-101", "amount": "99.99", "side": "credit"},
            ],
        }
        response = client.post("/api/journal-entries", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == "Total debits (100.00) must equal total credits (99.99)."

    def test_submit_invalid_date(self, client: TestClient) -> None:
        response = client.post("/api/journal-entries", json={**RENT, "date": "2026-02-30"})

        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"

    def test_submit_oversized_amount(self, client: TestClient) -> None:
        """자릿수 초과 금액은 0으로 해석되어 400"""
        body = {
            **RENT,
            "lines": [
                {"account_id": "acc-501", "amount": "1" * 30, "side": "debit"},
                {"account_id": "acc-101", "amount": "1" * 30, "side": "credit"},
            ],
        }
        response = client.post("/api/journal-entries", json=body)

        assert response.status_code == 400

    def test_approve_flow(self, client: TestClient, notifier: MockNotifier) -> None:
        entry = _submit(client, RENT)

        response = client.post(
            f"/api/journal-entries/{entry['id']}/approve", headers={"X-User": "lee@example.com"},
        )

        assert response.status_code == 200
        approved = response.json()
        assert approved["status"] == "approved"
        assert approved["approved_by"] == "lee@example.com"
        assert approved["posted"] is True
        assert len(notifier.get_by_type("approval")) == 1

        again = client.post(f"/api/journal-entries/{entry['id']}/approve")
        assert again.status_code == 409

    def test_reject_flow(self, client: TestClient) -> None:
        entry = _submit(client, RENT)

        response = client.post(
            f"/api/journal-entries/{entry['id']}/reject", json={"reason": "Wrong period"},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "rejected"

        inbox = client.get("/api/notifications", params={"recipient": "kim@example.com"}).json()
        assert inbox[0]["type"] == "rejection"
        assert inbox[0]["message"].endswith("Reason: Wrong period")

    def test_list_filters(self, client: TestClient) -> None:
        rent = _submit(client, RENT)
        fee = _submit(client, FEE)
        client.post(f"/api/journal-entries/{fee['id']}/approve")

        approved = client.get("/api/journal-entries", params={"status": "approved"}).json()
        assert [e["id"] for e in approved["entries"]] == [fee["id"]]

        march_first = client.get(
            "/api/journal-entries", params={"from": "2026-03-01", "to": "2026-03-01"},
        ).json()
        assert [e["id"] for e in march_first["entries"]] == [rent["id"]]

        assert client.get("/api/journal-entries", params={"search": "consulting"}).json()["total"] == 1

    def test_retry_posting_after_success_is_noop(self, client: TestClient) -> None:
        entry = _submit(client, RENT)
        client.post(f"/api/journal-entries/{entry['id']}/approve")

        response = client.post(f"/api/journal-entries/{entry['id']}/retry-posting")

        assert response.status_code == 200
        assert response.json()["inserted"] == []
        assert len(response.json()["skipped"]) == 0

    def test_unknown_entry(self, client: TestClient) -> None:
        assert client.get("/api/journal-entries/missing").status_code == 404


class TestLedgerAndReportsApi:
    """원장/보고서 API"""

    @pytest.fixture
    def posted(self, client: TestClient) -> None:
        for body in (FEE, RENT):
            entry = _submit(client, body)
            client.post(f"/api/journal-entries/{entry['id']}/approve")

    def test_account_ledger(self, client: TestClient, posted) -> None:
        response = client.get("/api/ledger/acc-101")

        assert response.status_code == 200
        data = response.json()
        assert [r["balance"] for r in data["rows"]] == ["-1200.00", "800.00"]
        assert data["ending_balance"] == "800.00"

    def test_account_ledger_without_lines(self, client: TestClient) -> None:
        data = client.get("/api/ledger/acc-110").json()

        assert data["rows"] == []
        assert data["ending_balance"] == "0.00"

    def test_trial_balance(self, client: TestClient, posted) -> None:
        response = client.get("/api/reports/trial-balance")

        assert response.status_code == 200
        body = response.json()
        assert body["company"] == "Test Books"
        assert body["report"] == "trial_balance"
        assert body["data"]["is_balanced"] is True
        assert body["data"]["total_debit"] == "2000.00"

    def test_income_statement(self, client: TestClient, posted) -> None:
        data = client.get("/api/reports/income-statement").json()["data"]

        assert data["revenue"] == "2000.00"
        assert data["expenses"] == "1200.00"
        assert data["net_income"] == "800.00"

    def test_balance_sheet_uses_opening_retained_earnings(self, client: TestClient, posted) -> None:
        data = client.get("/api/reports/balance-sheet").json()["data"]

        assert data["assets"] == "800.00"
        assert data["retained_earnings"] == "1800.00"

    def test_retained_earnings_period(self, client: TestClient, posted) -> None:
        body = client.get(
            "/api/reports/retained-earnings", params={"from": "2026-03-02", "to": "2026-03-31"},
        ).json()

        assert body["from_date"] == "2026-03-02"
        assert body["data"]["net_income"] == "2000.00"
        assert body["data"]["ending"] == "3000.00"
