"""Dependency providers for the API routes.

Routes receive the catalog storage and the image description provider
through FastAPI dependencies so tests can swap them with
``app.dependency_overrides``.
"""

from functools import lru_cache

from locallens.api.metrics import MeteredDescriptionProvider
from locallens.catalog.storage import CatalogStorage, KeyValueStore
from locallens.config import get_settings
from locallens.providers.description import (
    GeminiDescriptionProvider,
    ImageDescriptionProvider,
)


def get_storage() -> CatalogStorage:
    """Return catalog storage over the configured store file."""
    return CatalogStorage(KeyValueStore(get_settings().store_path))


@lru_cache
def get_describer() -> ImageDescriptionProvider:
    """Return the process-wide image description provider."""
    return MeteredDescriptionProvider(
        GeminiDescriptionProvider.from_settings(get_settings())
    )
