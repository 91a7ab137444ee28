"""
Tests for account API endpoints.

These test the HTTP layer: status codes, the response envelope and
error mapping. Business logic is tested in test_account_service.py.
"""

VALID_REGISTRATION = {
    "nama": "John Doe",
    "nik": "1234567890123456",
    "no_hp": "081234567890",
}


def register(client, **overrides):
    response = client.post("/v1/daftar", json={**VALID_REGISTRATION, **overrides})
    assert response.status_code == 201
    return response.json()["data"]["account_number"]


def deposit(client, account_number, amount):
    return client.post("/v1/tabung", json={
        "no_rekening": account_number,
        "nominal": amount,
    })


class TestRegister:

    def test_register_returns_201(self, client):
        response = client.post("/v1/daftar", json=VALID_REGISTRATION)
        assert response.status_code == 201

    def test_register_returns_envelope(self, client):
        body = client.post("/v1/daftar", json=VALID_REGISTRATION).json()

        assert body["code"] == 201
        assert body["status"] == "success"
        assert body["message"] == "Account registration successful"

        data = body["data"]
        assert len(data["account_number"]) == 10
        assert data["full_name"] == "John Doe"
        assert data["id_number"] == "1234567890123456"
        assert data["phone_number"] == "081234567890"
        assert float(data["balance"]) == 0.0

    def test_duplicate_id_number_returns_409(self, client):
        register(client)
        response = client.post("/v1/daftar", json={
            **VALID_REGISTRATION, "nama": "New User", "no_hp": "081111111111",
        })

        assert response.status_code == 409
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "ID number already registered"

    def test_duplicate_phone_number_returns_409(self, client):
        register(client)
        response = client.post("/v1/daftar", json={
            **VALID_REGISTRATION, "nama": "New User", "nik": "1111111111111111",
        })

        assert response.status_code == 409
        assert response.json()["message"] == "phone number already registered"

    def test_missing_name_returns_400(self, client):
        response = client.post("/v1/daftar", json={
            "nik": "1234567890123456",
            "no_hp": "081234567890",
        })

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Bad Request"
        assert "full_name" in body["errors"]


class TestDeposit:

    def test_deposit_returns_new_balance(self, client):
        account_number = register(client)
        response = deposit(client, account_number, 500000)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Deposit successful"
        assert float(body["data"]["saldo"]) == 500000.0

    def test_negative_amount_returns_400(self, client):
        account_number = register(client)
        response = deposit(client, account_number, -100)

        assert response.status_code == 400
        assert "amount" in response.json()["errors"]

        balance = client.get(f"/v1/saldo/{account_number}").json()
        assert float(balance["data"]["saldo"]) == 0.0

    def test_amount_too_large_returns_400(self, client):
        account_number = register(client)
        response = deposit(client, account_number, 10 ** 20)

        assert response.status_code == 400
        assert "amount" in response.json()["errors"]

    def test_unknown_account_returns_404(self, client):
        response = deposit(client, "9999999999", 100)

        assert response.status_code == 404
        assert response.json()["message"] == "account not found"


class TestWithdraw:

    def test_withdrawal_returns_new_balance(self, client):
        account_number = register(client)
        deposit(client, account_number, 1000000)

        response = client.post("/v1/tarik", json={
            "no_rekening": account_number,
            "nominal": 250000,
        })

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Withdrawal successful"
        assert float(body["data"]["saldo"]) == 750000.0

    def test_insufficient_balance_returns_400(self, client):
        account_number = register(client)
        deposit(client, account_number, 100000)

        response = client.post("/v1/tarik", json={
            "no_rekening": account_number,
            "nominal": 500000,
        })

        assert response.status_code == 400
        assert response.json()["message"] == "insufficient balance"

        balance = client.get(f"/v1/saldo/{account_number}").json()
        assert float(balance["data"]["saldo"]) == 100000.0


class TestGetBalance:

    def test_balance_after_deposits(self, client):
        account_number = register(client)
        deposit(client, account_number, 300)
        deposit(client, account_number, 200)

        response = client.get(f"/v1/saldo/{account_number}")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Get balance successful"
        assert float(body["data"]["saldo"]) == 500.0

    def test_unknown_account_returns_404(self, client):
        response = client.get("/v1/saldo/1000000000")
        assert response.status_code == 404

    def test_non_numeric_account_returns_400(self, client):
        response = client.get("/v1/saldo/abc")

        assert response.status_code == 400
        assert "account_number" in response.json()["errors"]


def test_unknown_endpoint_returns_404(client):
    response = client.get("/v1/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {
        "code": 404,
        "status": "error",
        "message": "Endpoint Not Found",
    }


def test_unexpected_error_returns_500_envelope(client, monkeypatch):
    from fastapi.testclient import TestClient
    from sqlalchemy.exc import OperationalError

    from account_service.main import app
    from account_service.services.account_service import AccountService

    def broken_get_balance(self, account_number):
        raise OperationalError("SELECT", {}, Exception("connection lost"))

    monkeypatch.setattr(AccountService, "get_balance", broken_get_balance)
    quiet_client = TestClient(app, raise_server_exceptions=False)

    response = quiet_client.get("/v1/saldo/1000000000")

    assert response.status_code == 500
    assert response.json() == {
        "code": 500,
        "status": "error",
        "message": "Internal Server Error",
    }
