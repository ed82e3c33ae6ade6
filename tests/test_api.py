"""Tests for the FastAPI application endpoints.

This module contains integration tests for the LocalLens API endpoints,
including health checks, shop management, and search.
"""

import pytest
from fastapi.testclient import TestClient

from locallens.api.dependencies import get_describer, get_storage
from locallens.api.main import app
from locallens.api.metrics import metrics_service

LONDON = {"latitude": "51.5074", "longitude": "-0.1278"}


@pytest.fixture
def client(storage, fake_describer):
    """Test client wired to a temp store and a canned describer."""
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_describer] = lambda: fake_describer
    metrics_service.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()
    metrics_service.reset()


def photo(name: str = "shirt.jpg", data: bytes = b"photo", mime_type: str = "image/jpeg"):
    return {"image": (name, data, mime_type)}


def test_ping_endpoint(client):
    """Test that the /ping endpoint returns correct status and JSON."""
    response = client.get("/ping")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert "X-Request-ID" in response.headers


def test_create_shop_defaults_to_single_shop_id(client):
    """Test that a shop without an explicit id gets the default id."""
    response = client.post("/shops", data={"name": "The Fashion Hub", **LONDON})

    assert response.status_code == 201
    data = response.json()
    assert data["id"] == "my-local-shop"
    assert data["name"] == "The Fashion Hub"
    assert data["location"] == {"latitude": 51.5074, "longitude": -0.1278}
    assert data["products"] == []


def test_get_shop(client):
    """Test fetching a shop after creating it."""
    client.post("/shops", data={"name": "Hub", "shop_id": "hub", **LONDON})

    response = client.get("/shops/hub")

    assert response.status_code == 200
    assert response.json()["name"] == "Hub"


def test_list_shops(client, storage, sample_shops):
    """Test listing the whole catalog."""
    storage.save_shops(sample_shops)

    response = client.get("/shops")

    assert response.status_code == 200
    assert [shop["id"] for shop in response.json()] == ["far", "near", "mid"]


def test_add_product(client, fake_describer):
    """Test listing a product with a photo."""
    client.post("/shops", data={"name": "Hub", **LONDON})
    fake_describer.default = "black leather boots"

    response = client.post(
        "/shops/my-local-shop/products",
        data={"name": "Boots"},
        files=photo("boots.png", b"boots", "image/png"),
    )

    assert response.status_code == 201
    product = response.json()
    assert product["name"] == "Boots"
    assert product["searchKeywords"] == "black leather boots"
    assert product["mimeType"] == "image/png"
    assert product["imageBase64"] == "Ym9vdHM="

    shop = client.get("/shops/my-local-shop").json()
    assert [p["id"] for p in shop["products"]] == [product["id"]]


def test_search_returns_ranked_results(client, storage, sample_shops, fake_describer):
    """Test that search results come back nearest first."""
    storage.save_shops(sample_shops)
    fake_describer.default = "blue shirt"

    response = client.post("/search", data=LONDON, files=photo())

    assert response.status_code == 200
    data = response.json()
    assert data["keywords"] == ["blue", "shirt"]
    assert data["count"] == 3
    assert [result["id"] for result in data["results"]] == ["p3", "p5", "p1"]

    first = data["results"][0]
    assert first["shopId"] == "near"
    assert first["shopName"] == "Near Shop"
    assert first["shopLocation"] == {"latitude": 51.51, "longitude": -0.1278}
    assert first["mapsUrl"] == "https://www.google.com/maps?q=51.51,-0.1278"

    distances = [result["distance"] for result in data["results"]]
    assert distances == sorted(distances)


def test_search_with_no_matches(client, storage, sample_shops, fake_describer):
    """Test that a search matching nothing returns an empty list."""
    storage.save_shops(sample_shops)
    fake_describer.default = "purple umbrella"

    response = client.post("/search", data=LONDON, files=photo())

    assert response.status_code == 200
    assert response.json()["results"] == []
    assert response.json()["count"] == 0


def test_metrics_endpoint(client, storage, sample_shops):
    """Test that completed searches are counted."""
    storage.save_shops(sample_shops)
    client.post("/search", data=LONDON, files=photo())

    response = client.get("/metrics")

    assert response.status_code == 200
    data = response.json()
    assert data["search_count"] == 1
    assert "description_count" in data
    assert "average_latency_ms" in data
