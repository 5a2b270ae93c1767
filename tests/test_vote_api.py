import pytest
from httpx import ASGITransport, AsyncClient

from core.auth import create_access_token
from core.depends import get_vote_service
from main import app


def auth_headers(user_id: int = 7) -> dict:
    token = create_access_token({"sub": str(user_id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def api(service):
    app.dependency_overrides[get_vote_service] = lambda: service
    yield app
    app.dependency_overrides.clear()


def client_for(api) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=api), base_url="http://testserver")


@pytest.mark.asyncio
async def test_cast_vote_returns_201(api, store):
    async with client_for(api) as client:
        response = await client.post(
            "/votes", json={"property_id": 42, "vote_option_id": 2}, headers=auth_headers()
        )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Vote recorded successfully"
    assert body["data"]["property_id"] == 42
    assert body["data"]["user_id"] == 7
    assert body["data"]["vote_option_id"] == 2
    assert body["data"]["vote_option_name"] == "Buy"
    assert store.votes[(42, 7)].vote_option_id == 2


@pytest.mark.asyncio
async def test_revote_keeps_same_vote_id(api, store):
    async with client_for(api) as client:
        first = await client.post(
            "/votes", json={"property_id": 42, "vote_option_id": 2}, headers=auth_headers()
        )
        second = await client.post(
            "/votes", json={"property_id": 42, "vote_option_id": 1}, headers=auth_headers()
        )

    assert second.status_code == 201
    assert second.json()["data"]["id"] == first.json()["data"]["id"]
    assert second.json()["data"]["vote_option_id"] == 1
    assert len(store.votes) == 1


@pytest.mark.asyncio
async def test_cast_vote_missing_field(api):
    async with client_for(api) as client:
        response = await client.post("/votes", json={"property_id": 42}, headers=auth_headers())

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "InvalidArgument"
    assert "vote_option_id" in body["message"]


@pytest.mark.asyncio
async def test_cast_vote_requires_auth(api, store):
    async with client_for(api) as client:
        response = await client.post("/votes", json={"property_id": 42, "vote_option_id": 2})

    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "error": "Unauthorized",
        "message": "Authentication required",
    }
    assert store.votes == {}


@pytest.mark.asyncio
async def test_cast_vote_rejects_bad_token(api):
    async with client_for(api) as client:
        response = await client.post(
            "/votes",
            json={"property_id": 42, "vote_option_id": 2},
            headers={"Authorization": "Bearer not-a-jwt"},
        )

    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized"


@pytest.mark.asyncio
async def test_cast_vote_for_someone_else(api, store):
    async with client_for(api) as client:
        response = await client.post(
            "/votes",
            json={"property_id": 42, "vote_option_id": 2, "user_id": 8},
            headers=auth_headers(7),
        )

    assert response.status_code == 400
    assert response.json()["error"] == "InvalidArgument"
    assert store.votes == {}


@pytest.mark.asyncio
async def test_cast_vote_cross_category(api):
    async with client_for(api) as client:
        response = await client.post(
            "/votes", json={"property_id": 42, "vote_option_id": 6}, headers=auth_headers()
        )

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "InvalidArgument",
        "message": "Vote option not valid for this property's category",
    }


@pytest.mark.asyncio
async def test_cast_vote_unknown_property(api):
    async with client_for(api) as client:
        response = await client.post(
            "/votes", json={"property_id": 999, "vote_option_id": 2}, headers=auth_headers()
        )

    assert response.status_code == 404
    assert response.json()["error"] == "NotFound"
    assert response.json()["message"] == "Property not found"


@pytest.mark.asyncio
async def test_vote_on_property_route(api, store):
    async with client_for(api) as client:
        response = await client.post(
            "/properties/43/votes", json={"vote_option_id": 5}, headers=auth_headers(8)
        )

    assert response.status_code == 201
    assert response.json()["data"]["property_id"] == 43
    assert store.votes[(43, 8)].vote_option_id == 5


@pytest.mark.asyncio
async def test_property_stats(api):
    async with client_for(api) as client:
        await client.post("/votes", json={"property_id": 42, "vote_option_id": 2}, headers=auth_headers(7))
        await client.post("/votes", json={"property_id": 42, "vote_option_id": 2}, headers=auth_headers(8))
        await client.post("/votes", json={"property_id": 42, "vote_option_id": 1}, headers=auth_headers(9))
        response = await client.get("/properties/42/stats")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total_votes"] == 3
    assert data["statistics"] == [
        {"option_name": "Buy", "vote_option_id": 2, "vote_count": 2, "percentage": 66.67},
        {"option_name": "Lease", "vote_option_id": 3, "vote_count": 0, "percentage": 0.0},
        {"option_name": "Partner", "vote_option_id": 4, "vote_count": 0, "percentage": 0.0},
        {"option_name": "Rent", "vote_option_id": 1, "vote_count": 1, "percentage": 33.33},
    ]


@pytest.mark.asyncio
async def test_property_stats_not_found(api):
    async with client_for(api) as client:
        response = await client.get("/properties/999/stats")

    assert response.status_code == 404
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_my_vote_lifecycle(api):
    async with client_for(api) as client:
        missing = await client.get("/votes/my-vote/42", headers=auth_headers())
        await client.post("/votes", json={"property_id": 42, "vote_option_id": 3}, headers=auth_headers())
        found = await client.get("/votes/my-vote/42", headers=auth_headers())
        deleted = await client.delete("/votes/42", headers=auth_headers())
        gone = await client.get("/votes/my-vote/42", headers=auth_headers())
        deleted_again = await client.delete("/votes/42", headers=auth_headers())

    assert missing.status_code == 404
    assert missing.json()["message"] == "No vote found for this property"
    assert found.status_code == 200
    assert found.json()["data"]["vote_option_name"] == "Lease"
    assert deleted.status_code == 200
    assert deleted.json() == {"success": True, "message": "Vote deleted successfully"}
    assert gone.status_code == 404
    assert deleted_again.status_code == 404
    assert deleted_again.json()["message"] == "No vote found to delete"


@pytest.mark.asyncio
async def test_vote_options(api):
    async with client_for(api) as client:
        all_options = await client.get("/votes/options")
        residential = await client.get("/votes/options/category/1")
        unknown = await client.get("/votes/options/category/99")

    assert all_options.status_code == 200
    assert len(all_options.json()["data"]) == 6
    assert residential.status_code == 200
    data = residential.json()["data"]
    assert data["category_id"] == 1
    assert data["category_name"] == "Residential"
    assert [opt["name"] for opt in data["vote_options"]] == ["Buy", "Lease", "Partner", "Rent"]
    assert unknown.status_code == 404


@pytest.mark.asyncio
async def test_my_votes_paginated(api):
    async with client_for(api) as client:
        await client.post("/votes", json={"property_id": 42, "vote_option_id": 1}, headers=auth_headers())
        await client.post("/votes", json={"property_id": 43, "vote_option_id": 6}, headers=auth_headers())
        response = await client.get("/votes/mine", params={"page": 1, "size": 1}, headers=auth_headers())

    assert response.status_code == 200
    page = response.json()["data"]
    assert page["total"] == 2
    assert len(page["items"]) == 1
    assert page["items"][0]["property_title"] == "Ikeja Office"


@pytest.mark.asyncio
async def test_health():
    async with client_for(app) as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_vote_options_with_counts_route(api):
    async with client_for(api) as client:
        await client.post("/votes", json={"property_id": 42, "vote_option_id": 2}, headers=auth_headers())
        listing = await client.get("/vote_options", params={"limit": 2})
        bad_limit = await client.get("/vote_options", params={"limit": 0})

    assert listing.status_code == 200
    data = listing.json()["data"]
    assert data["count"] == 2
    assert data["offset"] == 0
    assert [(opt["name"], opt["vote_count"]) for opt in data["vote_options"]] == [("Buy", 1), ("Invest", 0)]
    assert bad_limit.status_code == 400
    assert bad_limit.json()["error"] == "InvalidArgument"


@pytest.mark.asyncio
async def test_single_vote_option_route(api):
    async with client_for(api) as client:
        found = await client.get("/vote_options/6")
        missing = await client.get("/vote_options/999")

    assert found.status_code == 200
    assert found.json()["data"]["name"] == "Invest"
    assert found.json()["data"]["vote_count"] == 0
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "error": "NotFound", "message": "Vote option not found"}


@pytest.mark.asyncio
async def test_vote_option_votes_paginated(api):
    async with client_for(api) as client:
        await client.post("/votes", json={"property_id": 42, "vote_option_id": 1}, headers=auth_headers(7))
        await client.post("/votes", json={"property_id": 42, "vote_option_id": 1}, headers=auth_headers(8))
        response = await client.get("/vote_options/1/votes", params={"page": 1, "size": 1})
        missing = await client.get("/vote_options/999/votes")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["vote_option"]["name"] == "Rent"
    assert data["votes"]["total"] == 2
    assert [vote["user_id"] for vote in data["votes"]["items"]] == [8]
    assert data["votes"]["items"][0]["last_name"] == "Ade"
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_vote_option_summary_route(api):
    async with client_for(api) as client:
        await client.post("/votes", json={"property_id": 43, "vote_option_id": 6}, headers=auth_headers(9))
        response = await client.get("/vote_options/stats/summary")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["vote_options_stats"][0] == {
        "vote_option_id": 6,
        "option_name": "Invest",
        "category_name": "Commercial",
        "vote_count": 1,
        "unique_voters": 1,
        "properties_voted_on": 1,
    }
    assert data["summary"] == {
        "total_votes": 1,
        "total_users": 3,
        "total_properties": 2,
        "total_vote_options": 6,
    }


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(api):
    async with client_for(api) as client:
        missing = await client.get("/votes/nope/1")
        wrong_method = await client.put("/votes/42")

    assert missing.status_code == 404
    assert missing.json() == {"success": False, "error": "NotFound", "message": "Not Found"}
    assert wrong_method.status_code == 405
    assert wrong_method.json()["success"] is False
    assert wrong_method.json()["error"] == "MethodNotAllowed"
