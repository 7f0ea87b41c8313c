"""
Tests for registration create-or-update and status transitions
"""

import pytest

from eventdesk.core.errors import AlreadyPaidError, ValidationError
from eventdesk.services.registration_ledger import RegistrationLedger
from eventdesk.services.repositories import RegistrationRepo

@pytest.fixture
def ledger(database):
    return RegistrationLedger(database)

def register(ledger, email="a@x.com", **overrides):
    fields = {
        "full_name": "Asha Rao",
        "email": email,
        "phone": "9999999999",
        "org": "Acme",
        "role": "Engineer",
        "amount": 500,
    }
    fields.update(overrides)
    return ledger.register(**fields)

def test_first_registration_is_created_unpaid(ledger):
    result = register(ledger)

    assert result.updated is False
    registration = ledger.get(result.id)
    assert registration.status == "Unpaid"
    assert registration.amount == 500
    assert registration.full_name == "Asha Rao"

def test_repeat_unpaid_registration_updates_in_place(ledger):
    first = register(ledger)
    second = register(ledger, full_name="Asha R.", phone="8888888888", amount=750)

    assert second.updated is True
    assert second.id == first.id
    assert len(ledger.list_all()) == 1

    registration = ledger.get(first.id)
    assert registration.full_name == "Asha R."
    assert registration.phone == "8888888888"
    assert registration.amount == 750

def test_paid_email_is_rejected_without_mutation(ledger):
    first = register(ledger)
    ledger.mark_paid(first.id)

    with pytest.raises(AlreadyPaidError) as exc_info:
        register(ledger, full_name="Someone Else", amount=1)

    assert exc_info.value.to_dict()["alreadyPaid"] is True
    registration = ledger.get(first.id)
    assert registration.full_name == "Asha Rao"
    assert registration.amount == 500
    assert registration.status == "Paid"

@pytest.mark.parametrize("missing", ["full_name", "email", "phone"])
def test_required_fields(ledger, missing):
    with pytest.raises(ValidationError):
        register(ledger, **{missing: ""})

def test_list_all_most_recent_first(ledger):
    ids = [register(ledger, email=f"user{i}@x.com").id for i in range(3)]

    listed = [r.id for r in ledger.list_all()]
    assert listed == list(reversed(ids))

def test_status_transitions(ledger):
    result = register(ledger)

    assert ledger.mark_paid(result.id) is True
    assert ledger.get(result.id).status == "Paid"
    assert ledger.mark_unpaid(result.id) is True
    assert ledger.get(result.id).status == "Unpaid"

def test_status_change_on_missing_row_is_not_an_error(ledger):
    assert ledger.mark_paid(12345) is False
    assert ledger.mark_unpaid(12345) is False
    assert ledger.get(12345) is None

def lose_first_lookup(monkeypatch):
    """First email lookup misses, as if another request inserted the row meanwhile"""
    original = RegistrationRepo.get_by_email
    calls = []

    def get_by_email(db, email):
        calls.append(email)
        if len(calls) == 1:
            return None
        return original(db, email)

    monkeypatch.setattr(RegistrationRepo, "get_by_email", staticmethod(get_by_email))
    return calls

def test_concurrent_insert_is_retried_as_update(ledger, monkeypatch):
    first = register(ledger)
    calls = lose_first_lookup(monkeypatch)

    second = register(ledger, full_name="Asha R.", amount=750)

    assert len(calls) == 2
    assert second.updated is True
    assert second.id == first.id
    assert len(ledger.list_all()) == 1
    assert ledger.get(first.id).full_name == "Asha R."

def test_concurrent_insert_against_paid_row_is_rejected(ledger, monkeypatch):
    first = register(ledger)
    ledger.mark_paid(first.id)
    lose_first_lookup(monkeypatch)

    with pytest.raises(AlreadyPaidError):
        register(ledger, full_name="Someone Else")

    assert ledger.get(first.id).full_name == "Asha Rao"
    assert ledger.get(first.id).status == "Paid"
