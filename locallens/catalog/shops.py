"""Shop-owner and shopper flows.

Each flow is a sequential chain of collaborator calls: location lookup,
then image description, then a catalog read or write. Any failure aborts
the chain and propagates to the caller; nothing is retried.
"""

import base64
import logging
from typing import List, Optional

from locallens.api.exceptions import (
    CatalogWriteError,
    InvalidImageError,
    ShopAlreadyExistsError,
    ShopNotFoundError,
)
from locallens.catalog.matching import parse_search_keywords
from locallens.catalog.models import Product, SearchResult, Shop, new_product_id
from locallens.catalog.search import search_catalog
from locallens.catalog.storage import CatalogStorage
from locallens.providers.description import ImageDescriptionProvider
from locallens.providers.location import LocationProvider

logger = logging.getLogger(__name__)


def validate_image(image_bytes: bytes, mime_type: Optional[str]) -> str:
    """Check an uploaded image and return its mime type.

    Raises:
        InvalidImageError: If the payload is empty or not an image type.
    """
    if not image_bytes:
        raise InvalidImageError(mime_type, "image is empty")
    if not mime_type or not mime_type.startswith("image/"):
        raise InvalidImageError(mime_type, "file is not an image")
    return mime_type


def create_shop(
    storage: CatalogStorage,
    location_provider: LocationProvider,
    name: str,
    shop_id: str,
    overwrite: bool = True,
) -> Shop:
    """Create a shop at the owner's current location.

    By default an existing shop with the same id is replaced, products
    included. With ``overwrite=False`` an existing id is an error.

    Raises:
        LocationUnavailableError: If the owner's location is unavailable.
        ShopAlreadyExistsError: If overwrite is False and the id is taken.
        CatalogWriteError: If the catalog cannot be written.
    """
    if not overwrite and storage.get_shop_by_id(shop_id) is not None:
        raise ShopAlreadyExistsError(shop_id)

    location = location_provider.get_location()
    shop = Shop(id=shop_id, name=name, location=location, products=[])
    if not storage.save_shop(shop):
        raise CatalogWriteError(shop_id)

    logger.info(
        "Shop created",
        extra={
            "shop_id": shop_id,
            "latitude": location.latitude,
            "longitude": location.longitude,
        },
    )
    return shop


def add_product(
    storage: CatalogStorage,
    describer: ImageDescriptionProvider,
    shop_id: str,
    name: str,
    image_bytes: bytes,
    mime_type: Optional[str],
) -> Product:
    """Describe a product photo and list the product in a shop.

    Raises:
        ShopNotFoundError: If no shop has shop_id. Checked before the
            description call.
        InvalidImageError: If the upload is not a usable image.
        ImageAnalysisError: If the photo cannot be described.
        CatalogWriteError: If the catalog cannot be written.
    """
    if storage.get_shop_by_id(shop_id) is None:
        raise ShopNotFoundError(shop_id)

    mime_type = validate_image(image_bytes, mime_type)
    search_keywords = describer.describe(image_bytes, mime_type)

    product = Product(
        id=new_product_id(),
        name=name,
        image_base64=base64.b64encode(image_bytes).decode("ascii"),
        mime_type=mime_type,
        search_keywords=search_keywords,
    )

    if not storage.add_product_to_shop(shop_id, product):
        # The shop may have disappeared while the image was being described
        if storage.get_shop_by_id(shop_id) is None:
            raise ShopNotFoundError(shop_id)
        raise CatalogWriteError(shop_id)

    return product


def search_nearby(
    storage: CatalogStorage,
    location_provider: LocationProvider,
    describer: ImageDescriptionProvider,
    image_bytes: bytes,
    mime_type: Optional[str],
) -> tuple[List[str], List[SearchResult]]:
    """Find listed products resembling a photo, nearest first.

    Returns:
        Tuple of (search keywords, ranked search results).

    Raises:
        LocationUnavailableError: If the shopper's location is unavailable.
        InvalidImageError: If the upload is not a usable image.
        ImageAnalysisError: If the photo cannot be described.
    """
    mime_type = validate_image(image_bytes, mime_type)

    searcher_location = location_provider.get_location()
    search_keywords = parse_search_keywords(describer.describe(image_bytes, mime_type))
    shops = storage.get_shops()

    return search_keywords, search_catalog(shops, searcher_location, search_keywords)
