"""Shopper search endpoint for the LocalLens API.

A shopper uploads a photo of what they are looking for; the endpoint
returns every listed product sharing a keyword with it, nearest shop first.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from pydantic import BaseModel, Field

from locallens.api.dependencies import get_describer, get_storage
from locallens.api.exceptions import LocalLensException
from locallens.api.metrics import metrics_service
from locallens.catalog.models import SearchResult
from locallens.catalog.shops import search_nearby
from locallens.catalog.storage import CatalogStorage
from locallens.providers.description import ImageDescriptionProvider
from locallens.providers.location import FixedLocationProvider

# Configure module logger
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(
    prefix="/search",
    tags=["search"],
)


class SearchResponse(BaseModel):
    """Response model for search requests.

    Attributes:
        keywords: Keywords the search photo was described with.
        results: Matching products, nearest shop first.
        count: Number of results.
    """

    keywords: List[str] = Field(..., description="Keywords describing the photo")
    results: List[SearchResult] = Field(
        ..., description="Matching products sorted by distance"
    )
    count: int = Field(..., description="Number of results")


@router.post("", response_model=SearchResponse)
def search(
    image: UploadFile = File(...),
    latitude: Optional[float] = Form(None),
    longitude: Optional[float] = Form(None),
    storage: CatalogStorage = Depends(get_storage),
    describer: ImageDescriptionProvider = Depends(get_describer),
) -> SearchResponse:
    """Find products resembling a photo in shops near the shopper.

    Args:
        image: Photo of the wanted product.
        latitude: Shopper's current latitude.
        longitude: Shopper's current longitude.

    Returns:
        SearchResponse with the photo's keywords and the ranked matches.
        An empty result list means nothing matched.

    Raises:
        LocationUnavailableError: If no valid coordinates were sent.
        ImageAnalysisError: If the photo could not be described.
    """
    logger.info("Searching nearby shops")

    try:
        keywords, results = search_nearby(
            storage,
            FixedLocationProvider(latitude, longitude),
            describer,
            image_bytes=image.file.read(),
            mime_type=image.content_type,
        )
    except LocalLensException:
        raise
    except Exception as e:
        logger.error(f"Error searching catalog: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred during the search.",
        )

    metrics_service.record_search()
    return SearchResponse(keywords=keywords, results=results, count=len(results))
