"""Keyword matching between a search photo and listed products.

Both sides are keyword strings produced by the image-description service.
A product matches when it shares at least one keyword with the search.
Comparison is exact: no stemming, no fuzzy matching, no re-casing.
"""

from typing import Iterable, List

from locallens.catalog.models import Product


def parse_search_keywords(description: str) -> List[str]:
    """Split a description into search keywords.

    The description is split on single spaces, so repeated spaces yield
    empty tokens. Empty tokens never match a product keyword.
    """
    return description.split(" ")


def product_keywords(product: Product) -> List[str]:
    """Return a product's stored keywords split on whitespace."""
    return product.search_keywords.split()


def common_keywords(search_keywords: Iterable[str], product: Product) -> List[str]:
    """Return the search keywords that also appear in the product's keywords.

    Order and duplicates follow ``search_keywords``.
    """
    listed = set(product_keywords(product))
    return [keyword for keyword in search_keywords if keyword in listed]


def matches(search_keywords: Iterable[str], product: Product) -> bool:
    """Return True if the product shares at least one keyword with the search."""
    return len(common_keywords(search_keywords, product)) > 0
