"""Module for searching the catalog.

Finds every listed product sharing a keyword with the search photo and
ranks the matches by distance from the searcher.
"""

import logging
import time
from typing import List, Sequence

import numpy as np

from locallens.catalog.geo import build_maps_link, distances_from
from locallens.catalog.matching import matches
from locallens.catalog.models import Coordinates, Product, SearchResult, Shop

# Configure module logger
logger = logging.getLogger(__name__)


def find_matches(
    shops: Sequence[Shop], search_keywords: Sequence[str]
) -> List[tuple[Shop, Product]]:
    """Return (shop, product) pairs whose product matches the keywords.

    Pairs come out in catalog order: shops in store order, then products
    in listing order within each shop.
    """
    return [
        (shop, product)
        for shop in shops
        for product in shop.products
        if matches(search_keywords, product)
    ]


def search_catalog(
    shops: Sequence[Shop],
    searcher_location: Coordinates,
    search_keywords: Sequence[str],
) -> List[SearchResult]:
    """Search the catalog for products matching the keywords.

    Every product sharing at least one keyword with the search is returned,
    annotated with its shop and distance. There is no pagination and no
    score threshold.

    Args:
        shops: The full shop catalog.
        searcher_location: Where the searcher is.
        search_keywords: Keywords describing the search photo.

    Returns:
        Search results sorted by ascending distance. Products at the same
        distance keep catalog order.
    """
    start_time = time.time()

    matched = find_matches(shops, search_keywords)
    distances = distances_from(searcher_location, [shop.location for shop, _ in matched])

    # Stable sort keeps encounter order for equal distances
    order = np.argsort(distances, kind="stable")

    results = []
    for idx in order:
        shop, product = matched[int(idx)]
        results.append(
            SearchResult(
                **product.model_dump(),
                shop_id=shop.id,
                shop_name=shop.name,
                shop_location=shop.location,
                distance=float(distances[idx]),
                maps_url=build_maps_link(shop.location),
            )
        )

    logger.info(
        "Catalog searched",
        extra={
            "num_shops": len(shops),
            "num_keywords": len(search_keywords),
            "num_results": len(results),
            "search_time_ms": round((time.time() - start_time) * 1000, 2),
        },
    )

    return results
