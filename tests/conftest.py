"""Shared sample documents."""

import copy

import pytest


ACCOUNT = {
    "accountNumber": "ACC-1001",
    "accountType": "checking",
    "transactions": [
        {"transactionId": "T1", "transactionType": "debit", "amount": 25.5},
        {"transactionId": "T2", "transactionType": "credit", "amount": 100.0},
    ],
    "meta": {"createdBy": "batch", "version": 3},
}


@pytest.fixture
def account() -> dict:
    """A fresh copy of the sample account document."""
    return copy.deepcopy(ACCOUNT)


@pytest.fixture
def nested() -> dict:
    return {"a": {"b": {"c": 1, "d": 2}, "e": 3}, "f": 4}
