"""LocalLens: find products you photographed in shops near you.

This package provides a backend service that matches a product photo to
listings in nearby shops. Photos are turned into keywords by an external
image-description service and matches are ranked by distance.

Modules:
    api: FastAPI application and REST API endpoints
    catalog: Shop/product models, keyword matching, distance ranking, storage
    providers: Location and image-description collaborators
"""

__version__ = "0.1.0"
