class TestBusinesses:
    def test_create_business_starts_pending(self, client, make_user):
        owner = make_user()
        r = client.post("/api/businesses", json={"name": "Acme", "websiteUrl": "https://acme.test"},
                        headers=owner.headers)
        assert r.status_code == 201
        data = r.json()["data"]
        assert data["status"] == "PENDING"
        assert data["ownerId"] == owner.id
        assert data["websiteUrl"] == "https://acme.test"

    def test_list_my_businesses_only_shows_own(self, client, make_user):
        owner, other = make_user(), make_user()
        client.post("/api/businesses", json={"name": "Acme"}, headers=owner.headers)
        client.post("/api/businesses", json={"name": "Globex"}, headers=other.headers)

        r = client.get("/api/businesses/me", headers=owner.headers)
        assert [b["name"] for b in r.json()["data"]] == ["Acme"]

    def test_foreign_business_reads_as_missing(self, client, make_user):
        owner, other = make_user(), make_user()
        business_id = client.post("/api/businesses", json={"name": "Acme"}, headers=owner.headers).json()["data"]["id"]

        assert client.get(f"/api/businesses/{business_id}", headers=owner.headers).status_code == 200
        r = client.get(f"/api/businesses/{business_id}", headers=other.headers)
        assert r.status_code == 404
        assert r.json()["error"]["code"] == "BUSINESS_NOT_FOUND"

    def test_blank_name_rejected(self, client, make_user):
        owner = make_user()
        r = client.post("/api/businesses", json={"name": "   "}, headers=owner.headers)
        assert r.status_code == 422
        assert r.json()["error"]["details"][0]["field"] == "name"
