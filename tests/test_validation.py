"""Tests for delivery validation rules."""

import pytest

from delivery_api.models import (
    DELIVERY_FILTER_RULES,
    STATUS_UPDATE_RULES,
    DeliveryFilters,
    DeliveryStatus,
    StatusUpdate,
    run_rules,
)
from delivery_api.models.delivery import (
    INVALID_STATUS_FILTER,
    INVALID_STATUS_UPDATE,
    MISSING_DELIVERER_NAME,
)


@pytest.mark.parametrize("value,expected", [
    ("S", DeliveryStatus.DELIVERED),
    ("n", DeliveryStatus.NOT_DELIVERED),
    ("x", None),
    ("SN", None),
    ("", None),
    (None, None),
    (1, None),
])
def test_status_parse(value, expected):
    assert DeliveryStatus.parse(value) is expected


def test_filter_rules_accept_missing_status():
    assert run_rules(DELIVERY_FILTER_RULES, {"status": None}).passed
    assert run_rules(DELIVERY_FILTER_RULES, {"status": ""}).passed


def test_filter_rules_reject_unknown_status():
    outcome = run_rules(DELIVERY_FILTER_RULES, {"status": "delivered"})

    assert not outcome.passed
    assert outcome.reason == INVALID_STATUS_FILTER


def test_filters_treat_empty_strings_as_absent():
    filters = DeliveryFilters.from_query({"startDate": "", "pdv": "", "status": "s"})

    assert filters.start_date is None
    assert filters.pdv is None
    assert filters.status is DeliveryStatus.DELIVERED


def test_update_status_checked_before_name():
    outcome = run_rules(STATUS_UPDATE_RULES, {"status": "X"})

    assert outcome.reason == INVALID_STATUS_UPDATE


@pytest.mark.parametrize("name", [None, "", "   ", 42, ["Maria"]])
def test_update_rejects_missing_or_blank_name(name):
    payload = {"status": "S"}
    if name is not None:
        payload["delivererName"] = name

    outcome = run_rules(STATUS_UPDATE_RULES, payload)

    assert not outcome.passed
    assert outcome.reason == MISSING_DELIVERER_NAME


def test_status_update_normalizes_payload():
    payload = {"status": "s", "delivererName": "  Maria  "}
    assert run_rules(STATUS_UPDATE_RULES, payload).passed

    update = StatusUpdate.from_payload(payload)

    assert update.to_params("17") == {
        "status": "S",
        "deliverer_name": "Maria",
        "delivery_id": "17",
    }
