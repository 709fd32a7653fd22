"""Testes do normalizer Lemon Squeezy (webhook, pedido falho, log)."""

from __future__ import annotations

from datetime import datetime

import pytest

from api.normalizers.lemonsqueezy import (
    is_failed_order,
    last_non_blank_line,
    normalize_failed_order,
    normalize_log_line,
    normalize_webhook,
)


def _payload(attributes: dict, *, data_id: str | None = None, data_type: str = "orders") -> dict:
    data: dict = {"type": data_type, "attributes": attributes}
    if data_id is not None:
        data["id"] = data_id
    return {"meta": {"event_name": "order_created"}, "data": data}


class TestNormalizeWebhook:
    """Caminho de webhook."""

    def test_order_created_round_trip(self) -> None:
        payload = _payload(
            {
                "order_id": 42,
                "status": "Paid",
                "total_formatted": "$10.00",
                "user_email": "a@b.com",
            },
            data_type="order",
        )

        event = normalize_webhook(payload)

        assert event.message == "order_created: Order #42 - paid - $10.00 (a@b.com)"
        assert event.order_id == 42
        assert event.status == "paid"
        assert event.amount == "$10.00"
        assert event.customer_email == "a@b.com"
        assert event.type == "webhook"

    def test_message_uses_resource_id(self) -> None:
        payload = _payload({"order_number": "1001"}, data_id="55", data_type="order")

        event = normalize_webhook(payload)

        assert event.order_id == 1001
        assert event.message == "order_created: Order #55"

    def test_order_id_falls_back_to_resource_id(self) -> None:
        event = normalize_webhook(_payload({}, data_id="99"))
        assert event.order_id == 99

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("42", 42), (" 42", 42), ("42abc", 42), ("abc", None), ("", None)],
    )
    def test_order_id_leading_integer_parse(self, raw: str, expected: int | None) -> None:
        event = normalize_webhook(_payload({"order_id": raw}, data_id="7"))
        assert event.order_id == (expected if raw else 7)

    def test_unparseable_candidate_does_not_fall_through(self) -> None:
        """order_id não numérico não cai para data.id."""
        event = normalize_webhook(_payload({"order_id": "abc"}, data_id="7"))
        assert event.order_id is None

    def test_alternative_attribute_names(self) -> None:
        payload = _payload(
            {"email": "c@d.com", "status_formatted": "Refunded", "total": 1500},
            data_id="3",
        )

        event = normalize_webhook(payload)

        assert event.customer_email == "c@d.com"
        assert event.status == "refunded"
        assert event.amount == "1500"
        assert event.message == "order_created: Orders #3 - refunded - 1500 (c@d.com)"

    def test_resource_type_is_human_cased(self) -> None:
        event = normalize_webhook(_payload({}, data_id="1", data_type="subscription_invoices"))
        assert event.message == "order_created: Subscription Invoices #1"

    @pytest.mark.parametrize(
        "payload",
        [{}, {"meta": None, "data": None}, {"data": {"attributes": "nope"}}, {"meta": []}],
    )
    def test_missing_sections_never_raise(self, payload: dict) -> None:
        event = normalize_webhook(payload, event_name="subscription_updated")

        assert event.order_id is None
        assert event.message.startswith("subscription_updated:")

    def test_order_id_over_digit_limit_is_absent(self) -> None:
        event = normalize_webhook(_payload({"order_id": "9" * 5000}, data_id="55"))

        assert event.order_id is None
        assert event.message == "order_created: Orders #55"

    def test_non_string_fields_never_raise(self) -> None:
        payload = {
            "meta": {"event_name": 5},
            "data": {"type": 7, "id": ["a"], "attributes": {"status": 3, "user_email": {}}},
        }

        event = normalize_webhook(payload)

        assert event.order_id is None
        assert event.status == "3"
        assert event.customer_email is None
        assert event.message.startswith("5: 7 #")

    def test_timestamp_is_assigned_locally(self) -> None:
        payload = _payload({"created_at": "2020-01-01T00:00:00Z"}, data_id="1")

        event = normalize_webhook(payload)

        assert not event.timestamp.startswith("2020")
        assert datetime.fromisoformat(event.timestamp).tzinfo is not None

    def test_serialized_form_omits_absent_fields(self) -> None:
        data = normalize_webhook(_payload({}, data_id="abc")).to_dict()

        assert set(data) == {"timestamp", "type", "message"}


class TestFailedOrders:
    """Caminho de polling."""

    def test_is_failed_order(self) -> None:
        assert is_failed_order({"attributes": {"status": "refunded"}}) is True
        assert is_failed_order({"attributes": {"status": "failed"}}) is True
        assert is_failed_order({"attributes": {"status": "cancelled"}}) is True
        assert is_failed_order({"attributes": {"status": "paid"}}) is False
        assert is_failed_order({"attributes": {}}) is False
        assert is_failed_order({}) is False

    def test_normalize_failed_order(self) -> None:
        order = {
            "id": "1",
            "attributes": {
                "status": "refunded",
                "total_formatted": "$5.00",
                "user_email": "x@y.com",
                "created_at": "2024-01-01T00:00:00Z",
            },
        }

        event = normalize_failed_order(order)

        assert event.type == "failed_payment"
        assert event.order_id == 1
        assert event.status == "refunded"
        assert event.amount == "$5.00"
        assert event.customer_email == "x@y.com"
        assert event.message == "Failed payment: Order #1 - refunded - $5.00"

    def test_failed_order_id_over_digit_limit_is_absent(self) -> None:
        event = normalize_failed_order({"id": "9" * 5000, "attributes": {"status": "failed"}})

        assert event.order_id is None
        assert event.status == "failed"


class TestLogLine:
    """Caminho de log tail."""

    def test_extracts_fields(self) -> None:
        line = "2024-01-01 webhook order#123 Refunded for jane.doe@example.com"

        event = normalize_log_line(line)

        assert event is not None
        assert event.order_id == 123
        assert event.customer_email == "jane.doe@example.com"
        assert event.status == "refunded"
        assert event.message == line
        assert event.type == "webhook"

    def test_order_separators(self) -> None:
        assert normalize_log_line("order_77 paid").order_id == 77
        assert normalize_log_line("order 78 paid").order_id == 78
        assert normalize_log_line("order79").order_id == 79

    def test_order_id_over_digit_limit_is_absent(self) -> None:
        event = normalize_log_line("order#" + "9" * 5000 + " paid")

        assert event is not None
        assert event.order_id is None
        assert event.status == "paid"

    def test_irrelevant_line_returns_none(self) -> None:
        assert normalize_log_line("server started on port 3000") is None

    def test_keyword_match_is_case_sensitive(self) -> None:
        assert normalize_log_line("ORDER 12 PAID") is None

    def test_relevant_line_without_fields(self) -> None:
        event = normalize_log_line("payment gateway restarted")

        assert event is not None
        assert event.order_id is None
        assert event.status is None

    def test_last_non_blank_line(self) -> None:
        assert last_non_blank_line("a\nb\n\n   \n") == "b"
        assert last_non_blank_line("\n \n") is None
        assert last_non_blank_line("") is None
