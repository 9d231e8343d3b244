import pytest


@pytest.fixture
def contributor(client, make_user):
    user = make_user("writer")
    r = client.post("/api/contributors/apply", json={
        "bio": "I write about hiring",
        "socialLinks": {"twitter": "@writer"},
    }, headers=user.headers)
    assert r.status_code == 201, r.text
    return user


def _post_article(client, author, title="Hiring in 2030"):
    r = client.post("/api/articles", json={"title": title, "content": "Body text"}, headers=author.headers)
    assert r.status_code == 201, r.text
    return r.json()["data"]


class TestContributors:
    def test_apply_creates_active_profile(self, client, contributor):
        r = client.get("/api/contributors/me", headers=contributor.headers)
        data = r.json()["data"]
        assert data["status"] == "ACTIVE"
        assert data["socialLinks"] == {"twitter": "@writer"}

    def test_second_application_conflicts(self, client, contributor):
        r = client.post("/api/contributors/apply", json={}, headers=contributor.headers)
        assert r.status_code == 409

    def test_profile_missing(self, client, make_user):
        r = client.get("/api/contributors/me", headers=make_user().headers)
        assert r.status_code == 404
        assert r.json()["error"]["code"] == "CONTRIBUTOR_PROFILE_NOT_FOUND"


class TestArticles:
    def test_contributor_article_is_published_immediately(self, client, contributor):
        article = _post_article(client, contributor)
        assert article["status"] == "PUBLISHED"
        assert article["publishedAt"] is not None
        assert article["authorId"] == contributor.id

        r = client.get("/api/articles")
        assert [a["id"] for a in r.json()["data"]] == [article["id"]]
        assert client.get(f"/api/articles/{article['slug']}").status_code == 200

    def test_non_contributor_cannot_post(self, client, make_user):
        r = client.post("/api/articles", json={"title": "T", "content": "C"}, headers=make_user().headers)
        assert r.status_code == 403
        assert r.json()["error"]["code"] == "CONTRIBUTOR_NOT_ACTIVE"

    def test_only_author_updates(self, client, contributor, make_user):
        article = _post_article(client, contributor)
        r = client.patch(f"/api/articles/{article['id']}", json={"excerpt": "Short"}, headers=contributor.headers)
        assert r.status_code == 200
        assert r.json()["data"]["excerpt"] == "Short"

        r = client.patch(f"/api/articles/{article['id']}", json={"excerpt": "Hijack"}, headers=make_user().headers)
        assert r.status_code == 404

    def test_status_change_requires_admin(self, client, contributor):
        article = _post_article(client, contributor)
        r = client.patch(f"/api/articles/{article['id']}/status", json={"status": "SUSPENDED"},
                         headers=contributor.headers)
        assert r.status_code == 403

    def test_republish_keeps_original_published_at(self, client, contributor, admin):
        article = _post_article(client, contributor)
        url = f"/api/admin/articles/{article['id']}/status"

        r = client.patch(url, json={"status": "SUSPENDED"}, headers=admin.headers)
        assert r.json()["data"]["status"] == "SUSPENDED"
        assert client.get(f"/api/articles/{article['id']}").status_code == 404

        r = client.patch(url, json={"status": "PUBLISHED"}, headers=admin.headers)
        data = r.json()["data"]
        assert data["status"] == "PUBLISHED"
        assert data["publishedAt"] == article["publishedAt"]

    def test_my_articles_include_suspended(self, client, contributor, admin):
        article = _post_article(client, contributor)
        client.patch(f"/api/articles/{article['id']}/status", json={"status": "ARCHIVED"}, headers=admin.headers)

        r = client.get("/api/articles/me", headers=contributor.headers)
        assert [a["status"] for a in r.json()["data"]] == ["ARCHIVED"]
        assert client.get("/api/articles").json()["data"] == []
