import pytest

from conftest import job_payload


@pytest.fixture
def active_job(client, make_user, approved_business):
    owner = make_user("owner")
    business = approved_business(owner)
    r = client.post("/api/jobs", json=job_payload(business["id"]), headers=owner.headers)
    assert r.status_code == 201, r.text
    return owner, r.json()["data"]


PLATFORM_APPLICATION = {
    "applicationMethod": "PLATFORM",
    "cvUrl": "https://files.test/cv.pdf",
    "portfolioUrl": "https://portfolio.test",
    "coverLetter": "Hello",
}


class TestApplyValidation:
    def test_platform_requires_portfolio(self, client, make_user, active_job):
        _, job = active_job
        applicant = make_user()
        payload = {k: v for k, v in PLATFORM_APPLICATION.items() if k != "portfolioUrl"}

        r = client.post(f"/api/jobs/{job['id']}/applications", json=payload, headers=applicant.headers)
        assert r.status_code == 422
        assert r.json()["error"]["details"] == [
            {"field": "portfolioUrl", "message": "portfolioUrl is required"}
        ]

    def test_method_is_required(self, client, make_user, active_job):
        _, job = active_job
        applicant = make_user()
        r = client.post(f"/api/jobs/{job['id']}/applications", json={}, headers=applicant.headers)
        assert r.status_code == 422
        assert r.json()["error"]["details"][0]["field"] == "applicationMethod"

    def test_unknown_method(self, client, make_user, active_job):
        _, job = active_job
        applicant = make_user()
        r = client.post(f"/api/jobs/{job['id']}/applications", json={"applicationMethod": "FAX"},
                        headers=applicant.headers)
        assert r.status_code == 422

    def test_guest_must_identify(self, client, active_job):
        _, job = active_job
        r = client.post(f"/api/jobs/{job['id']}/applications", json=PLATFORM_APPLICATION)
        assert r.status_code == 422
        fields = {d["field"] for d in r.json()["error"]["details"]}
        assert fields == {"applicantName", "applicantEmail"}


class TestApply:
    def test_member_platform_application(self, client, make_user, active_job):
        _, job = active_job
        applicant = make_user()
        r = client.post(f"/api/jobs/{job['id']}/applications", json=PLATFORM_APPLICATION,
                        headers=applicant.headers)
        assert r.status_code == 201
        data = r.json()["data"]
        assert data["status"] == "SUBMITTED"
        assert data["userId"] == applicant.id
        assert data["externalClickedAt"] is None

    def test_guest_external_click(self, client, active_job):
        _, job = active_job
        r = client.post(f"/api/jobs/{job['id']}/applications", json={
            "applicationMethod": "EXTERNAL",
            "externalTarget": "URL",
            "externalDestination": "https://careers.acme.test/apply",
            "applicantName": "Guest",
            "applicantEmail": "guest@example.com",
        })
        assert r.status_code == 201
        data = r.json()["data"]
        assert data["status"] == "CLICKED"
        assert data["userId"] is None
        assert data["externalClickedAt"] is not None

    def test_invalid_token_is_rejected_not_downgraded(self, client, active_job):
        _, job = active_job
        r = client.post(f"/api/jobs/{job['id']}/applications", json=PLATFORM_APPLICATION,
                        headers={"Authorization": "Bearer junk"})
        assert r.status_code == 401
        assert r.json()["error"]["code"] == "UNAUTHORIZED"

    def test_suspended_job_is_closed(self, client, make_user, active_job):
        owner, job = active_job
        client.patch(f"/api/jobs/{job['id']}/status", json={"status": "SUSPENDED"}, headers=owner.headers)
        applicant = make_user()
        r = client.post(f"/api/jobs/{job['id']}/applications", json=PLATFORM_APPLICATION,
                        headers=applicant.headers)
        assert r.status_code == 404
        assert r.json()["error"]["code"] == "JOB_NOT_FOUND"


class TestApplicationAccess:
    def _apply(self, client, job, applicant):
        r = client.post(f"/api/jobs/{job['id']}/applications", json=PLATFORM_APPLICATION,
                        headers=applicant.headers)
        return r.json()["data"]

    def test_owner_lists_applications(self, client, make_user, active_job):
        owner, job = active_job
        application = self._apply(client, job, make_user())

        r = client.get(f"/api/jobs/{job['id']}/applications", headers=owner.headers)
        assert [a["id"] for a in r.json()["data"]] == [application["id"]]

        stranger = make_user()
        r = client.get(f"/api/jobs/{job['id']}/applications", headers=stranger.headers)
        assert r.status_code == 404

    def test_detail_visible_to_applicant_and_owner_only(self, client, make_user, active_job):
        owner, job = active_job
        applicant = make_user()
        application = self._apply(client, job, applicant)
        url = f"/api/job-applications/{application['id']}"

        assert client.get(url, headers=applicant.headers).status_code == 200
        assert client.get(url, headers=owner.headers).status_code == 200
        r = client.get(url, headers=make_user().headers)
        assert r.status_code == 403
        assert r.json()["error"]["code"] == "FORBIDDEN"

    def test_missing_application(self, client, make_user):
        r = client.get("/api/job-applications/nope", headers=make_user().headers)
        assert r.status_code == 404
        assert r.json()["error"]["code"] == "JOB_APPLICATION_NOT_FOUND"
