"""FastAPI application module for LocalLens.

This module contains the FastAPI application, route handlers, and API
endpoints for shop owners listing products and shoppers searching for them.
"""
