"""Catalog module for LocalLens.

This module contains the shop and product data model, the keyword matcher,
the haversine distance calculator, the search orchestration that ranks
matching products by distance, and the key-value store that persists the
shop catalog.
"""
