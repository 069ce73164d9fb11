from datetime import date


def test_create_job_assigns_id_and_posted_date_server_side(client, admin_headers, job_payload):
    r = client.post(
        "/jobs",
        headers=admin_headers,
        json=job_payload(id="client-id", postedDate="1999-01-01"),
    )
    assert r.status_code == 201, r.text
    job = r.json()
    assert job["id"] and job["id"] != "client-id"
    assert job["postedDate"] == date.today().isoformat()


def test_create_job_defaults(client, admin_headers, job_payload):
    payload = job_payload()
    for key in ("requirements", "benefits"):
        payload.pop(key)
    job = client.post("/jobs", headers=admin_headers, json=payload).json()
    assert job["requirements"] == []
    assert job["benefits"] == []
    assert job["urgency"] == "medium"
    assert job["active"] is True


def test_create_job_requires_core_fields(client, admin_headers, job_payload):
    for missing in ("title", "type", "location", "department", "description", "formFields"):
        payload = job_payload()
        payload.pop(missing)
        r = client.post("/jobs", headers=admin_headers, json=payload)
        assert r.status_code == 400, (missing, r.text)
        assert r.json()["success"] is False


def test_create_job_rejects_bad_form_fields(client, admin_headers, job_payload):
    bad_type = job_payload(formFields=[{"id": "a", "name": "x", "label": "X", "type": "slider"}])
    assert client.post("/jobs", headers=admin_headers, json=bad_type).status_code == 400

    dup = job_payload(formFields=[
        {"id": "a", "name": "x", "label": "X", "type": "text"},
        {"id": "b", "name": "x", "label": "X again", "type": "text"},
    ])
    assert client.post("/jobs", headers=admin_headers, json=dup).status_code == 400

    bad_urgency = job_payload(urgency="critical")
    assert client.post("/jobs", headers=admin_headers, json=bad_urgency).status_code == 400


def test_form_fields_round_trip_in_order(client, make_job):
    fields = [
        {"id": "q3", "name": "portfolio", "label": "Portfolio", "type": "url", "required": False,
         "placeholder": "https://"},
        {"id": "q1", "name": "email", "label": "Email", "type": "email", "required": True},
        {"id": "q2", "name": "track", "label": "Track", "type": "select", "required": True,
         "options": ["Policy", "Engineering", "Design"]},
        {"id": "q4", "name": "agree", "label": "I agree", "type": "checkbox", "required": False},
    ]
    job = make_job(formFields=fields)

    fetched = client.get(f"/jobs/{job['id']}").json()
    assert fetched["formFields"] == fields


def test_get_job_is_idempotent_and_not_found_is_404(client, make_job):
    job = make_job()
    first = client.get(f"/jobs/{job['id']}").json()
    second = client.get(f"/jobs/{job['id']}").json()
    assert first == second == job

    r = client.get("/jobs/nope")
    assert r.status_code == 404
    assert r.json()["error"] == "Job not found"


def test_list_jobs_newest_first(client, make_job):
    a = make_job(title="First")
    b = make_job(title="Second")
    ids = [j["id"] for j in client.get("/jobs").json()]
    assert ids == [b["id"], a["id"]]


def test_update_job_whitelist_and_immutable_id(client, admin_headers, make_job):
    job = make_job()
    r = client.put(
        f"/jobs/{job['id']}",
        headers=admin_headers,
        json={"id": "other", "title": "Senior Research Assistant", "active": False, "color": "blue"},
    )
    assert r.status_code == 200, r.text
    updated = r.json()
    assert updated["id"] == job["id"]
    assert updated["title"] == "Senior Research Assistant"
    assert updated["active"] is False
    assert "color" not in updated
    assert updated["formFields"] == job["formFields"]
    assert client.get("/jobs/other").status_code == 404


def test_update_and_delete_unknown_job_are_404(client, admin_headers):
    assert client.put("/jobs/ghost", headers=admin_headers, json={"title": "x"}).status_code == 404
    assert client.delete("/jobs/ghost", headers=admin_headers).status_code == 404


def test_delete_job(client, admin_headers, make_job):
    job = make_job()
    r = client.delete(f"/jobs/{job['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["success"] is True
    assert client.get(f"/jobs/{job['id']}").status_code == 404


def test_job_writes_need_admin_token(client, job_payload):
    assert client.post("/jobs", json=job_payload()).status_code == 401
    assert client.put("/jobs/x", json={"title": "x"}).status_code == 401
    assert client.delete("/jobs/x").status_code == 401

    r = client.post("/jobs", headers={"Authorization": "Bearer not-a-token"}, json=job_payload())
    assert r.status_code == 401


def test_non_admin_role_is_forbidden(client, job_payload):
    from backend.app.utils.jwt import create_access_token

    token = create_access_token({"sub": "someone", "role": "viewer"})
    r = client.post("/jobs", headers={"Authorization": f"Bearer {token}"}, json=job_payload())
    assert r.status_code == 403
