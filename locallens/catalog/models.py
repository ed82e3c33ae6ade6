"""Data model for the LocalLens catalog.

Shops own an ordered list of products. Products carry the keyword string
produced by the image-description service for their photo. Search results
are products annotated with the owning shop and its distance from the
searcher; they are computed per search and never persisted.

Field names serialize in camelCase so the stored catalog keeps the same
shape as the browser demo's local storage value.
"""

import time
import uuid
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CatalogModel(BaseModel):
    """Base model with camelCase aliases accepted on input and emitted on output."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Coordinates(CatalogModel):
    """A point on the Earth's surface in decimal degrees."""

    latitude: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    longitude: float = Field(
        ..., ge=-180.0, le=180.0, description="Longitude in degrees"
    )


class Product(CatalogModel):
    """A listed item with its photo and derived search keywords.

    Attributes:
        id: Unique product identifier.
        name: Display name given by the shop owner.
        image_base64: Base64-encoded image payload.
        mime_type: Mime type of the image payload.
        search_keywords: Space-separated lowercase keywords for the photo.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique product identifier")
    name: str = Field(..., description="Product name")
    image_base64: str = Field(..., description="Base64-encoded product image")
    mime_type: str = Field(..., description="Mime type of the product image")
    search_keywords: str = Field(
        ..., description="Space-separated lowercase keywords describing the image"
    )


class Shop(CatalogModel):
    """A seller with a fixed location and a product catalog."""

    id: str = Field(..., description="Unique shop identifier")
    name: str = Field(..., description="Shop name")
    location: Coordinates
    products: List[Product] = Field(default_factory=list)


class SearchResult(Product):
    """A product annotated with its shop's distance from the searcher.

    Attributes:
        shop_id: Identifier of the shop listing the product.
        shop_name: Name of the shop listing the product.
        shop_location: Where the shop is.
        distance: Great-circle distance from the searcher in kilometers.
        maps_url: Link to the shop's location on Google Maps.
    """

    shop_id: str
    shop_name: str
    shop_location: Coordinates
    distance: float = Field(..., ge=0.0, description="Distance in kilometers")
    maps_url: str = ""


def new_product_id() -> str:
    """Return a product id from the current time in milliseconds plus a random suffix."""
    return f"prod_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"
