def _article(**overrides) -> dict:
    body = {
        "title": "Fellowship Program Launches",
        "subtitle": "Supporting emerging leaders",
        "content": "<p>" + "The program will select twenty fellows annually. " * 5 + "</p>",
        "category": "Education",
        "type": "news",
        "authorName": "Sarah Johnson",
        "date": "May 10, 2023",
    }
    body.update(overrides)
    return body


def test_create_fills_excerpt_image_and_featured(client, admin_headers):
    r = client.post("/articles", headers=admin_headers, json=_article())
    assert r.status_code == 201, r.text
    article = r.json()
    assert article["id"]
    assert article["excerpt"] == article["content"][:150] + "..."
    assert article["image"] == "/news/placeholder-thumb-1.jpg"
    assert article["featured"] is False


def test_short_content_excerpt_has_no_ellipsis(client, admin_headers):
    article = client.post("/articles", headers=admin_headers, json=_article(content="Short.")).json()
    assert article["excerpt"] == "Short."


def test_listing_omits_content_but_detail_has_it(client, admin_headers):
    first = client.post("/articles", headers=admin_headers, json=_article(title="One")).json()
    second = client.post("/articles", headers=admin_headers, json=_article(title="Two")).json()

    listed = client.get("/articles").json()
    assert [a["id"] for a in listed] == [second["id"], first["id"]]
    assert all("content" not in a for a in listed)

    detail = client.get(f"/articles/{first['id']}").json()
    assert detail["content"] == first["content"]


def test_create_requires_fields(client, admin_headers):
    r = client.post("/articles", headers=admin_headers, json=_article(subtitle=""))
    assert r.status_code == 400
    assert r.json()["details"]["missing"] == ["subtitle"]


def test_update_and_delete(client, admin_headers):
    article = client.post("/articles", headers=admin_headers, json=_article()).json()

    r = client.put(
        f"/articles/{article['id']}",
        headers=admin_headers,
        json={"id": "x", "title": "Updated", "content": "New body", "category": "AI", "type": "news",
              "featured": True},
    )
    assert r.status_code == 200, r.text
    updated = r.json()
    assert updated["id"] == article["id"]
    assert updated["title"] == "Updated"
    assert updated["featured"] is True
    assert updated["subtitle"] == article["subtitle"]

    assert client.put("/articles/ghost", headers=admin_headers, json=_article()).status_code == 404
    assert client.delete(f"/articles/{article['id']}", headers=admin_headers).json()["success"] is True
    assert client.get(f"/articles/{article['id']}").status_code == 404
    assert client.delete(f"/articles/{article['id']}", headers=admin_headers).status_code == 404


def test_article_writes_need_admin(client):
    assert client.post("/articles", json=_article()).status_code == 401
