"""Shared fixtures for LocalLens tests."""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from locallens.api.exceptions import ImageAnalysisError, LocationUnavailableError
from locallens.catalog.models import Coordinates, Product, Shop
from locallens.catalog.storage import CatalogStorage, KeyValueStore
from locallens.providers.description import ImageDescriptionProvider
from locallens.providers.location import LocationProvider

# Configure logging for tests
logging.basicConfig(level=logging.WARNING)


class FakeDescriber(ImageDescriptionProvider):
    """Describer returning canned keywords, keyed by image payload."""

    def __init__(self, descriptions: Optional[Dict[bytes, str]] = None, default: str = "blue shirt"):
        self.descriptions = descriptions or {}
        self.default = default
        self.calls: List[tuple] = []

    def describe(self, image_bytes: bytes, mime_type: str) -> str:
        self.calls.append((image_bytes, mime_type))
        return self.descriptions.get(image_bytes, self.default)


class FailingDescriber(ImageDescriptionProvider):
    """Describer that always fails."""

    def __init__(self):
        self.calls = 0

    def describe(self, image_bytes: bytes, mime_type: str) -> str:
        self.calls += 1
        raise ImageAnalysisError(RuntimeError("service down"))


class FailingLocationProvider(LocationProvider):
    """Location provider that always fails."""

    def get_location(self) -> Coordinates:
        raise LocationUnavailableError()


def make_product(product_id: str, keywords: str, name: str = "Item") -> Product:
    return Product(
        id=product_id,
        name=name,
        image_base64="aGVsbG8=",
        mime_type="image/jpeg",
        search_keywords=keywords,
    )


@pytest.fixture
def storage(tmp_path) -> CatalogStorage:
    """Catalog storage over an empty store file in a temp directory."""
    return CatalogStorage(KeyValueStore(str(tmp_path / "store.json")))


@pytest.fixture
def searcher() -> Coordinates:
    """Searcher standing in central London."""
    return Coordinates(latitude=51.5074, longitude=-0.1278)


@pytest.fixture
def sample_shops() -> List[Shop]:
    """Three shops at increasing distance from central London."""
    return [
        Shop(
            id="far",
            name="Far Shop",
            location=Coordinates(latitude=51.60, longitude=-0.1278),
            products=[
                make_product("p1", "blue striped shirt", "Striped Shirt"),
                make_product("p2", "red hat"),
            ],
        ),
        Shop(
            id="near",
            name="Near Shop",
            location=Coordinates(latitude=51.51, longitude=-0.1278),
            products=[make_product("p3", "blue jeans", "Jeans")],
        ),
        Shop(
            id="mid",
            name="Mid Shop",
            location=Coordinates(latitude=51.55, longitude=-0.1278),
            products=[
                make_product("p4", "black leather boots"),
                make_product("p5", "navy blue scarf", "Scarf"),
            ],
        ),
    ]


@pytest.fixture
def product_factory():
    """Factory building products with the given id and keywords."""
    return make_product


@pytest.fixture
def fake_describer() -> FakeDescriber:
    """Describer answering "blue shirt" unless told otherwise."""
    return FakeDescriber()


@pytest.fixture
def failing_describer() -> FailingDescriber:
    """Describer whose every call fails."""
    return FailingDescriber()


@pytest.fixture
def failing_location() -> FailingLocationProvider:
    """Location provider whose every call fails."""
    return FailingLocationProvider()
