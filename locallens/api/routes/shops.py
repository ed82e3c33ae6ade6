"""Shop-owner endpoints for the LocalLens API.

Shop owners register a shop at their current location and list products
by uploading a photo; the photo is described into search keywords when the
product is added.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from locallens.api.dependencies import get_describer, get_storage
from locallens.api.exceptions import LocalLensException, ShopNotFoundError
from locallens.catalog.models import Product, Shop
from locallens.catalog.shops import add_product, create_shop
from locallens.catalog.storage import CatalogStorage
from locallens.config import get_settings
from locallens.providers.description import ImageDescriptionProvider
from locallens.providers.location import FixedLocationProvider

# Configure module logger
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(
    prefix="/shops",
    tags=["shops"],
)


@router.get("", response_model=List[Shop])
def list_shops(storage: CatalogStorage = Depends(get_storage)) -> List[Shop]:
    """Return every shop in the catalog with its products."""
    return storage.get_shops()


@router.get("/{shop_id}", response_model=Shop)
def get_shop(shop_id: str, storage: CatalogStorage = Depends(get_storage)) -> Shop:
    """Return one shop.

    Raises:
        ShopNotFoundError: If no shop has shop_id.
    """
    shop = storage.get_shop_by_id(shop_id)
    if shop is None:
        raise ShopNotFoundError(shop_id)
    return shop


@router.post("", response_model=Shop, status_code=status.HTTP_201_CREATED)
def register_shop(
    name: str = Form(..., min_length=1),
    latitude: Optional[float] = Form(None),
    longitude: Optional[float] = Form(None),
    shop_id: Optional[str] = Form(None),
    overwrite: bool = Form(True),
    storage: CatalogStorage = Depends(get_storage),
) -> Shop:
    """Create a shop at the owner's current location.

    The device reports its coordinates with the request. Without them the
    shop cannot be placed and the request fails with 400.

    Args:
        name: Shop name.
        latitude: Owner's current latitude.
        longitude: Owner's current longitude.
        shop_id: Shop id (default: the configured single-shop id).
        overwrite: Replace an existing shop with the same id (default: True).

    Returns:
        The stored shop, with no products.
    """
    shop_id = shop_id or get_settings().default_shop_id
    logger.info(f"Creating shop {shop_id}")

    try:
        return create_shop(
            storage,
            FixedLocationProvider(latitude, longitude),
            name=name,
            shop_id=shop_id,
            overwrite=overwrite,
        )
    except LocalLensException:
        raise
    except Exception as e:
        logger.error(f"Error creating shop {shop_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create shop: {str(e)}",
        )


@router.post(
    "/{shop_id}/products",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
)
def list_product(
    shop_id: str,
    name: str = Form(..., min_length=1),
    image: UploadFile = File(...),
    storage: CatalogStorage = Depends(get_storage),
    describer: ImageDescriptionProvider = Depends(get_describer),
) -> Product:
    """Add a product to a shop.

    The photo is sent to the image description service and the returned
    keywords are stored with the product.

    Example:
        POST /shops/my-local-shop/products  (multipart: name, image)
        Returns the new product with its generated search keywords.
    """
    logger.info(f"Adding product to shop {shop_id}")

    try:
        return add_product(
            storage,
            describer,
            shop_id=shop_id,
            name=name,
            image_bytes=image.file.read(),
            mime_type=image.content_type,
        )
    except LocalLensException:
        raise
    except Exception as e:
        logger.error(f"Error adding product to shop {shop_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to add product: {str(e)}",
        )
