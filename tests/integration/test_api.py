"""Integration tests for API endpoints"""

from unittest.mock import MagicMock
from fastapi.testclient import TestClient

CHECK_IN = "2026-06-01T14:00:00Z"


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "mukhymat_quote_total" in response.text


def test_request_id_header(client: TestClient):
    generated = client.get("/health")
    assert generated.headers["X-Request-ID"]

    echoed = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert echoed.headers["X-Request-ID"] == "req-123"


def test_create_and_fetch_quote(client: TestClient):
    """Test POST /v1/quotes then GET /v1/quotes/{quote_id}"""
    response = client.post(
        "/v1/quotes",
        json={"camp_id": "camp_sakhir", "price_per_night": 25, "nights": 2, "guests": 3},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["camp_price"] == 150.0
    assert data["service_fee"] == 15.0
    assert data["taxes"] == 16.5
    assert data["total"] == 181.5
    assert data["total_fils"] == 181500
    assert data["currency"] == "BHD"
    assert data["formatted_total"] == "181.50 BHD"

    fetched = client.get(f"/v1/quotes/{data['quote_id']}")
    assert fetched.status_code == 200
    stored = fetched.json()
    assert stored["total"] == 181.5
    assert stored["camp_id"] == "camp_sakhir"
    assert stored["created_at"] is not None


def test_quote_custom_rates(client: TestClient):
    response = client.post(
        "/v1/quotes",
        json={
            "camp_id": "camp_zallaq",
            "price_per_night": 1.05,
            "nights": 1,
            "guests": 1,
            "service_fee_percentage": 10,
            "tax_percentage": 10,
            "currency": "bhd",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1.28
    assert data["total_fils"] == 1280
    assert data["currency"] == "BHD"


def test_quote_validation(client: TestClient):
    zero_nights = client.post(
        "/v1/quotes",
        json={"camp_id": "camp_sakhir", "price_per_night": 25, "nights": 0, "guests": 1},
    )
    assert zero_nights.status_code == 422

    negative_price = client.post(
        "/v1/quotes",
        json={"camp_id": "camp_sakhir", "price_per_night": -5, "nights": 1, "guests": 1},
    )
    assert negative_price.status_code == 422


def test_get_quote_not_found(client: TestClient):
    fake_uuid = "00000000-0000-0000-0000-000000000000"
    assert client.get(f"/v1/quotes/{fake_uuid}").status_code == 404
    assert client.get("/v1/quotes/not-a-uuid").status_code == 400


def test_list_policies(client: TestClient):
    response = client.get("/v1/policies")

    assert response.status_code == 200
    data = response.json()
    assert data["service_fee_percentage"] == 10
    policies = {p["policy"]: p for p in data["policies"]}
    assert set(policies) == {"flexible", "moderate", "strict"}
    assert [t["min_hours"] for t in policies["moderate"]["tiers"]] == [120, 48]
    assert [t["refund_percentage"] for t in policies["moderate"]["tiers"]] == [100, 50]


def test_guest_cancellation_partial_refund(client: TestClient, ledger_client: MagicMock):
    """Test 60h before check-in on moderate: 50% refund reported to the ledger"""
    response = client.post(
        "/v1/cancellations/guest",
        json={
            "booking_id": "booking_1",
            "total_amount": 100,
            "check_in": CHECK_IN,
            "cancelled_at": "2026-05-30T02:00:00Z",
            "policy": "moderate",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["policy"] == "moderate"
    assert data["refund"]["refund_percentage"] == 50
    assert data["refund"]["refund_amount"] == 45.0
    assert data["refund"]["service_fee"] == 10.0
    assert data["refund"]["can_cancel"] is True

    ledger_client.send_cancellation_event.assert_called_once()
    payload = ledger_client.send_cancellation_event.call_args.args[0]
    assert payload["event"] == "GUEST_CANCELLATION_REFUND"
    assert payload["booking_id"] == "booking_1"
    assert payload["refund_amount"] == 45.0
    assert payload["cancellation_id"] == data["cancellation_id"]


def test_guest_cancellation_no_refund_skips_ledger(client: TestClient, ledger_client: MagicMock):
    response = client.post(
        "/v1/cancellations/guest",
        json={
            "booking_id": "booking_2",
            "total_amount": 100,
            "check_in": CHECK_IN,
            "cancelled_at": "2026-06-01T13:00:00Z",
            "policy": "flexible",
        },
    )

    assert response.status_code == 200
    assert response.json()["refund"]["refund_amount"] == 0
    ledger_client.send_cancellation_event.assert_not_called()


def test_guest_cancellation_defaults(client: TestClient):
    """Test omitted policy falls back to moderate; naive datetimes are UTC"""
    response = client.post(
        "/v1/cancellations/guest",
        json={
            "booking_id": "booking_3",
            "total_amount": 100,
            "check_in": "2026-06-01T14:00:00",
            "cancelled_at": "2026-05-29T02:00:00",  # 84h before
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["policy"] == "moderate"
    assert data["refund"]["refund_percentage"] == 50


def test_guest_cancellation_unknown_policy(client: TestClient):
    response = client.post(
        "/v1/cancellations/guest",
        json={"booking_id": "booking_4", "total_amount": 100, "check_in": CHECK_IN, "policy": "lenient"},
    )
    assert response.status_code == 422


def test_host_cancellation(client: TestClient, ledger_client: MagicMock):
    """Test host cancels 10 days out: guest gets everything, host pays 25%"""
    response = client.post(
        "/v1/cancellations/host",
        json={
            "booking_id": "booking_5",
            "total_amount": 200,
            "check_in": CHECK_IN,
            "cancelled_at": "2026-05-22T14:00:00Z",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["guest_refund"]["refund_amount"] == 200.0
    assert data["guest_refund"]["service_fee"] == 0.0
    assert data["host_penalty"]["penalty_percentage"] == 25
    assert data["host_penalty"]["penalty_amount"] == 50.0
    assert data["within_penalty_period"] is True

    payload = ledger_client.send_cancellation_event.call_args.args[0]
    assert payload["event"] == "HOST_CANCELLATION"
    assert payload["host_penalty_amount"] == 50.0


def test_cancellation_history(client: TestClient):
    client.post(
        "/v1/cancellations/guest",
        json={
            "booking_id": "booking_6",
            "total_amount": 100,
            "check_in": CHECK_IN,
            "cancelled_at": "2026-05-20T14:00:00Z",
            "policy": "strict",
        },
    )
    client.post(
        "/v1/cancellations/host",
        json={
            "booking_id": "booking_6",
            "total_amount": 100,
            "check_in": CHECK_IN,
            "cancelled_at": "2026-04-01T14:00:00Z",
        },
    )

    response = client.get("/v1/cancellations/history?booking_id=booking_6")

    assert response.status_code == 200
    data = response.json()
    assert data["booking_id"] == "booking_6"
    assert len(data["cancellations"]) == 2
    by_initiator = {c["initiated_by"]: c for c in data["cancellations"]}
    assert by_initiator["guest"]["policy"] == "strict"
    assert by_initiator["guest"]["refund_percentage"] == 50
    assert by_initiator["host"]["penalty_percentage"] == 0
    assert by_initiator["host"]["policy"] is None


def test_refund_eligibility(client: TestClient):
    response = client.post(
        "/v1/refunds/eligibility",
        json={
            "total_amount": 100,
            "check_in": CHECK_IN,
            "policy": "moderate",
            "as_of": "2026-05-29T14:00:00Z",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["eligible"] is True
    assert data["percentage"] == 50
    assert data["amount"] == 45.0
    assert data["formatted_deadline"] == "May 30, 2026 at 2:00 PM"


def test_refund_eligibility_non_refundable(client: TestClient):
    response = client.post(
        "/v1/refunds/eligibility",
        json={"total_amount": 100, "check_in": CHECK_IN, "refundable": False},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["eligible"] is False
    assert data["deadline"] is None
    assert data["formatted_deadline"] is None


def test_amounts_beyond_limit_rejected(client: TestClient):
    huge_quote = client.post(
        "/v1/quotes",
        json={"camp_id": "camp_sakhir", "price_per_night": 1e27, "nights": 1, "guests": 1},
    )
    assert huge_quote.status_code == 422

    huge_cancellation = client.post(
        "/v1/cancellations/guest",
        json={"booking_id": "booking_7", "total_amount": 1e27, "check_in": CHECK_IN},
    )
    assert huge_cancellation.status_code == 422
