"""Tests for API and redirect endpoints."""

import pytest


def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.asyncio
class TestLinkEndpoints:
    """Test /api/links."""

    async def test_create_link(self, client, token_for, sample_urls):
        response = await client.post(
            "/api/links",
            json={"url": sample_urls[0]},
            headers=auth(token_for("alice")),
        )

        assert response.status_code == 200
        assert response.headers["cache-control"] == "no-store"
        data = response.json()
        assert data["success"] is True
        short_code = data["data"]["short_code"]
        assert data["data"]["short_url"] == f"http://testserver/r/{short_code}"

    async def test_create_link_behind_proxy(self, client, token_for, sample_urls):
        response = await client.post(
            "/api/links",
            json={"url": sample_urls[0], "short_code": "proxied"},
            headers={
                **auth(token_for("alice")),
                "X-Forwarded-Proto": "https",
                "X-Forwarded-Host": "sho.rt",
                "X-Forwarded-Prefix": "/links",
            },
        )

        assert response.json()["data"]["short_url"] == "https://sho.rt/links/r/proxied"

    async def test_create_link_with_session_cookie(self, client, token_for, sample_urls):
        response = await client.post(
            "/api/links",
            json={"url": sample_urls[0]},
            headers={"Cookie": f"session={token_for('alice')}"},
        )

        assert response.json()["success"] is True

    async def test_create_link_unauthorized(self, client, sample_urls):
        response = await client.post("/api/links", json={"url": sample_urls[0]})

        assert response.status_code == 200
        assert response.json() == {"success": False, "error": "Unauthorized"}

    async def test_create_link_invalid_url(self, client, token_for):
        response = await client.post(
            "/api/links",
            json={"url": "not-a-url"},
            headers=auth(token_for("alice")),
        )

        assert response.json() == {"success": False, "error": "Please enter a valid URL"}

    async def test_create_link_malformed_body(self, client, token_for):
        response = await client.post(
            "/api/links",
            content=b"{not json",
            headers={**auth(token_for("alice")), "Content-Type": "application/json"},
        )

        assert response.json() == {"success": False, "error": "Invalid request body"}

    async def test_create_duplicate_custom_code(self, client, token_for, sample_urls):
        await client.post(
            "/api/links",
            json={"url": sample_urls[0], "short_code": "promo"},
            headers=auth(token_for("alice")),
        )

        response = await client.post(
            "/api/links",
            json={"url": sample_urls[1], "short_code": "promo"},
            headers=auth(token_for("bob")),
        )

        assert response.json() == {"success": False, "error": "Short code already exists"}

    async def test_list_links(self, client, token_for, sample_urls):
        for url in sample_urls:
            await client.post("/api/links", json={"url": url}, headers=auth(token_for("alice")))
        await client.post("/api/links", json={"url": sample_urls[0]}, headers=auth(token_for("bob")))

        response = await client.get("/api/links", headers=auth(token_for("alice")))

        assert response.headers["cache-control"] == "no-store"
        links = response.json()["data"]["links"]
        assert [link["url"] for link in links] == list(reversed(sample_urls))
        assert all(link["owner_id"] == "alice" for link in links)

    async def test_update_link(self, client, token_for, repository, sample_urls):
        created = await repository.create("alice", sample_urls[0], short_code="before")

        response = await client.patch(
            f"/api/links/{created.id}",
            json={"short_code": "after"},
            headers=auth(token_for("alice")),
        )

        data = response.json()
        assert data["success"] is True
        assert data["data"]["short_code"] == "after"
        assert data["data"]["short_url"] == "http://testserver/r/after"
        assert (await repository.get_by_short_code("after")).url == sample_urls[0]

    async def test_update_other_owners_link(self, client, token_for, repository, sample_urls):
        created = await repository.create("alice", sample_urls[0])

        response = await client.patch(
            f"/api/links/{created.id}",
            json={"url": "https://evil.example"},
            headers=auth(token_for("bob")),
        )

        assert response.json() == {"success": False, "error": "Link not found or unauthorized"}

    async def test_delete_link(self, client, token_for, repository, sample_urls):
        created = await repository.create("alice", sample_urls[0])

        response = await client.delete(f"/api/links/{created.id}", headers=auth(token_for("alice")))

        assert response.json() == {"success": True}
        assert await repository.get_by_short_code(created.short_code) is None

    async def test_health_check(self, client):
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"


@pytest.mark.asyncio
class TestRedirect:
    """Test GET /r/{short_code}."""

    async def test_round_trip(self, client, token_for):
        create = await client.post(
            "/api/links",
            json={"url": "https://example.com/x"},
            headers=auth(token_for("alice")),
        )
        short_code = create.json()["data"]["short_code"]

        response = await client.get(f"/r/{short_code}", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "https://example.com/x"

    async def test_location_is_stored_url_verbatim(self, client, repository):
        await repository.create("alice", "https://example.com/a|b^c?q=1", short_code="verbatim")

        response = await client.get("/r/verbatim", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "https://example.com/a|b^c?q=1"

    async def test_non_ascii_target_is_percent_encoded(self, client, repository):
        await repository.create("alice", "https://example.com/caf\u00e9", short_code="unicode")

        response = await client.get("/r/unicode", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "https://example.com/caf%C3%A9"

    async def test_redirect_needs_no_authentication(self, client, repository):
        await repository.create("alice", "https://example.com/public", short_code="public")

        response = await client.get("/r/public", follow_redirects=False)

        assert response.status_code == 307

    async def test_unknown_code(self, client):
        response = await client.get("/r/missing", follow_redirects=False)

        assert response.status_code == 404
        assert response.text == "Link not found"
        assert "location" not in response.headers

    async def test_lookup_is_case_sensitive(self, client, repository):
        await repository.create("alice", "https://example.com/case", short_code="CaseCode")

        response = await client.get("/r/casecode", follow_redirects=False)

        assert response.status_code == 404

    async def test_other_methods_not_allowed(self, client, repository):
        await repository.create("alice", "https://example.com/x", short_code="getonly")

        response = await client.post("/r/getonly", follow_redirects=False)

        assert response.status_code == 405
