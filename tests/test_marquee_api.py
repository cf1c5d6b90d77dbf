from newsportal.models.marquee import MarqueeContent


def add_item(test_db, content, type="breaking", is_active=True, order=0):
    item = MarqueeContent(content=content, type=type, is_active=is_active, order=order)
    test_db.add(item)
    test_db.commit()
    test_db.refresh(item)
    return item


async def test_public_sees_active_items_in_order(async_client, test_db):
    add_item(test_db, "second", order=2)
    add_item(test_db, "first", order=1)
    add_item(test_db, "hidden", is_active=False, order=0)

    response = await async_client.get("/api/marquee")

    assert response.status_code == 200
    assert [item["content"] for item in response.json()["data"]] == ["first", "second"]


async def test_admin_sees_inactive_items(async_client, auth_headers, test_db):
    add_item(test_db, "live")
    add_item(test_db, "hidden", is_active=False)

    response = await async_client.get("/api/marquee", headers=auth_headers)

    assert {item["content"] for item in response.json()["data"]} == {"live", "hidden"}


async def test_filter_by_type(async_client, test_db):
    add_item(test_db, "news flash", type="breaking")
    add_item(test_db, "office closed", type="announcement")

    response = await async_client.get("/api/marquee", params={"type": "announcement"})

    assert [item["content"] for item in response.json()["data"]] == ["office closed"]


async def test_invalid_type_filter(async_client):
    response = await async_client.get("/api/marquee", params={"type": "weather"})
    assert response.status_code == 400


async def test_create_marquee(async_client, auth_headers):
    response = await async_client.post(
        "/api/marquee",
        json={"content": "  बड़ी खबर  ", "type": "breaking", "order": 3},
        headers=auth_headers,
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["content"] == "बड़ी खबर"
    assert data["isActive"] is True
    assert data["order"] == 3


async def test_create_marquee_validation(async_client, auth_headers):
    too_long = await async_client.post(
        "/api/marquee", json={"content": "x" * 301, "type": "breaking"}, headers=auth_headers
    )
    blank = await async_client.post("/api/marquee", json={"content": "   ", "type": "breaking"}, headers=auth_headers)
    negative = await async_client.post(
        "/api/marquee", json={"content": "ok", "type": "breaking", "order": -1}, headers=auth_headers
    )

    assert too_long.status_code == 400
    assert blank.status_code == 400
    assert negative.status_code == 400


async def test_create_requires_token(async_client):
    response = await async_client.post("/api/marquee", json={"content": "x", "type": "breaking"})
    assert response.status_code == 401


async def test_update_and_delete_marquee(async_client, auth_headers, test_db):
    item = add_item(test_db, "old text")

    updated = await async_client.put(
        f"/api/marquee/{item.id}", json={"content": "new text", "isActive": False}, headers=auth_headers
    )
    deleted = await async_client.delete(f"/api/marquee/{item.id}", headers=auth_headers)
    again = await async_client.delete(f"/api/marquee/{item.id}", headers=auth_headers)

    assert updated.status_code == 200
    assert updated.json()["data"]["content"] == "new text"
    assert updated.json()["data"]["isActive"] is False
    assert updated.json()["data"]["type"] == "breaking"
    assert deleted.status_code == 200
    assert again.status_code == 404
