from datetime import timedelta

import pytest
from icalendar import Calendar

from marketplace.errors import UnauthorizedError, ValidationError
from marketplace.models import Event
from marketplace.services import status_machine
from marketplace.services.calendar_service import generate_event_ics
from marketplace.services.pagination import Page
from marketplace.services.token_service import TokenIssuer
from marketplace.utils.security import hash_password, verify_password
from marketplace.utils.text import slugify


class TestPage:
    def test_defaults_for_missing_or_bad_input(self):
        assert Page.from_params(None, None) == Page(page=1, limit=10)
        assert Page.from_params("abc", "-5") == Page(page=1, limit=10)
        assert Page.from_params("0", "0") == Page(page=1, limit=10)

    def test_limit_is_capped(self):
        assert Page.from_params("3", "500").limit == 100

    def test_offset_and_meta(self):
        page = Page.from_params("3", "10")
        assert page.offset == 20
        assert page.meta(21) == {"page": 3, "limit": 10, "totalItems": 21, "totalPages": 3}
        assert page.meta(0)["totalPages"] == 0


class TestStatusMachine:
    @pytest.mark.parametrize("machine, value", [
        (status_machine.BUSINESS, "ACTIVE"),
        (status_machine.JOB, "PENDING"),
        (status_machine.ARTICLE, "DRAFT"),
        (status_machine.EVENT, "SUSPENDED"),
        (status_machine.PAYMENT, "PENDING"),
        (status_machine.PAYMENT, None),
    ])
    def test_rejects_values_outside_table(self, machine, value):
        with pytest.raises(ValidationError) as exc:
            machine.validate(value)
        assert exc.value.details[0]["field"] == "status"

    def test_accepts_allowed_value(self):
        assert status_machine.EVENT.validate("DRAFT") == "DRAFT"


class TestTokens:
    def _issuer(self, **overrides):
        options = dict(
            access_secret="a",
            refresh_secret="r",
            algorithm="HS256",
            access_ttl=timedelta(minutes=5),
            refresh_ttl=timedelta(days=1),
        )
        options.update(overrides)
        return TokenIssuer(**options)

    def test_access_claims(self):
        issuer = self._issuer()
        claims = issuer.verify_access_token(issuer.issue_access_token("u1", "u1@example.com", ["USER"]))
        assert claims["sub"] == "u1"
        assert claims["roles"] == ["USER"]

    def test_refresh_tokens_are_unique(self):
        issuer = self._issuer()
        first, _ = issuer.issue_refresh_token("u1")
        second, _ = issuer.issue_refresh_token("u1")
        assert first != second

    def test_expired_token(self):
        issuer = self._issuer(access_ttl=timedelta(seconds=-1))
        token = issuer.issue_access_token("u1", "u1@example.com", [])
        with pytest.raises(UnauthorizedError):
            issuer.verify_access_token(token)

    def test_wrong_secret(self):
        token = self._issuer().issue_access_token("u1", "u1@example.com", [])
        with pytest.raises(UnauthorizedError):
            self._issuer(access_secret="other").verify_access_token(token)


class TestHelpers:
    def test_password_hashing(self):
        stored = hash_password("hunter22")
        assert verify_password(stored, "hunter22")
        assert not verify_password(stored, "hunter23")
        assert not verify_password("not-a-hash", "hunter22")

    def test_slugify(self):
        assert slugify("  Hello, World!  ", millis=42) == "hello-world-42"

    def test_event_ics(self):
        event = Event(
            id="e1",
            title="Launch",
            description="Product launch",
            location="Jakarta",
            start_datetime="2030-05-01T09:00:00.000000Z",
            end_datetime="2030-05-01T11:00:00.000000Z",
            is_paid=True,
            price_per_person=50000,
            admin_fee=2500,
        )
        cal = Calendar.from_ical(generate_event_ics(event))
        entries = [c for c in cal.walk() if c.name == "VEVENT"]
        assert len(entries) == 1
        assert str(entries[0]["summary"]) == "Launch"
        assert entries[0].decoded("dtstart").hour == 9
        assert "50000" in str(entries[0]["description"])
        assert len([c for c in entries[0].walk() if c.name == "VALARM"]) == 2
