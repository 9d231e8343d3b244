from conftest import event_payload


def _create(client, user, **overrides):
    r = client.post("/api/events", json=event_payload(**overrides), headers=user.headers)
    assert r.status_code == 201, r.text
    return r.json()["data"]


class TestEventCreation:
    def test_paid_event_carries_admin_fee(self, client, make_user):
        creator = make_user()
        event = _create(client, creator, pricePerPerson=50000, quota=10)
        assert event["isPaid"] is True
        assert event["pricePerPerson"] == 50000
        assert event["adminFee"] == 2500
        assert event["status"] == "PUBLISHED"
        assert event["publishedAt"] is not None
        assert event["type"] == "GENERAL"
        assert event["startDatetime"] == "2030-05-01T09:00:00.000000Z"

    def test_free_event(self, client, make_user):
        event = _create(client, make_user(), pricePerPerson=0, quota=0)
        assert event["isPaid"] is False
        assert event["pricePerPerson"] is None
        assert event["adminFee"] == 0
        assert event["quota"] is None

    def test_draft_is_hidden_until_published(self, client, make_user):
        creator = make_user()
        event = _create(client, creator, status="DRAFT")
        assert event["publishedAt"] is None
        assert client.get(f"/api/events/{event['id']}").status_code == 404
        assert client.get("/api/events").json()["data"] == []

        r = client.patch(f"/api/events/{event['id']}/status", json={"status": "PUBLISHED"}, headers=creator.headers)
        assert r.status_code == 200
        assert r.json()["data"]["publishedAt"] is not None
        assert client.get(f"/api/events/{event['slug']}").status_code == 200

    def test_cannot_create_cancelled(self, client, make_user):
        r = client.post("/api/events", json=event_payload(status="CANCELLED"), headers=make_user().headers)
        assert r.status_code == 422
        assert r.json()["error"]["details"][0]["field"] == "status"

    def test_end_before_start_rejected(self, client, make_user):
        r = client.post("/api/events", json=event_payload(endDatetime="2030-04-30T09:00:00Z"),
                        headers=make_user().headers)
        assert r.status_code == 422
        assert r.json()["error"]["details"][0]["field"] == "endDatetime"

    def test_bad_datetime_is_validation_error(self, client, make_user):
        r = client.post("/api/events", json=event_payload(startDatetime="next tuesday"),
                        headers=make_user().headers)
        assert r.status_code == 422
        assert r.json()["error"]["details"][0]["field"] == "startDatetime"


class TestEventQueries:
    def test_upcoming_and_ordering(self, client, make_user):
        creator = make_user()
        later = _create(client, creator, title="Later", startDatetime="2031-01-01T09:00:00Z",
                        endDatetime="2031-01-01T10:00:00Z")
        sooner = _create(client, creator, title="Sooner")
        _create(client, creator, title="Past", startDatetime="2020-01-01T09:00:00Z",
                endDatetime="2020-01-01T10:00:00Z")

        assert [e["title"] for e in client.get("/api/events").json()["data"]] == ["Past", "Sooner", "Later"]
        r = client.get("/api/events", params={"upcoming": "true"})
        assert [e["id"] for e in r.json()["data"]] == [sooner["id"], later["id"]]

    def test_search_covers_location(self, client, make_user):
        creator = make_user()
        _create(client, creator, title="Java Night", location="Yogyakarta")
        _create(client, creator, title="Go Day")
        r = client.get("/api/events", params={"q": "yogya"})
        assert [e["title"] for e in r.json()["data"]] == ["Java Night"]

    def test_my_events_include_drafts(self, client, make_user):
        creator = make_user()
        _create(client, creator, status="DRAFT")
        assert len(client.get("/api/events/me", headers=creator.headers).json()["data"]) == 1

    def test_calendar_export(self, client, make_user):
        event = _create(client, make_user(), title="Python Meetup")
        r = client.get(f"/api/events/{event['slug']}/calendar")
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/calendar")
        assert b"BEGIN:VCALENDAR" in r.content
        assert b"SUMMARY:Python Meetup" in r.content


class TestEventUpdates:
    def test_price_change_recomputes_fee(self, client, make_user):
        creator = make_user()
        event = _create(client, creator)
        assert event["isPaid"] is False

        r = client.patch(f"/api/events/{event['id']}", json={"pricePerPerson": 75000}, headers=creator.headers)
        data = r.json()["data"]
        assert data["isPaid"] is True
        assert data["adminFee"] == 2500

        r = client.patch(f"/api/events/{event['id']}", json={"location": "Medan"}, headers=creator.headers)
        data = r.json()["data"]
        assert data["location"] == "Medan"
        assert data["pricePerPerson"] == 75000

    def test_republish_keeps_published_at(self, client, make_user):
        creator = make_user()
        event = _create(client, creator)
        url = f"/api/events/{event['id']}/status"
        client.patch(url, json={"status": "CANCELLED"}, headers=creator.headers)
        r = client.patch(url, json={"status": "PUBLISHED"}, headers=creator.headers)
        assert r.json()["data"]["publishedAt"] == event["publishedAt"]

    def test_foreign_event_reads_as_missing(self, client, make_user):
        event = _create(client, make_user())
        other = make_user()
        r = client.patch(f"/api/events/{event['id']}/status", json={"status": "ARCHIVED"}, headers=other.headers)
        assert r.status_code == 404
        assert r.json()["error"]["code"] == "EVENT_NOT_FOUND"
        r = client.patch(f"/api/events/{event['id']}", json={"title": "Mine"}, headers=other.headers)
        assert r.status_code == 404
