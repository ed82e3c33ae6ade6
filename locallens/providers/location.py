"""Location providers.

A location provider resolves where the caller currently is. Over HTTP the
device reports its coordinates with the request, so the provider only
validates what it was given.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import ValidationError

from locallens.api.exceptions import LocationUnavailableError
from locallens.catalog.models import Coordinates

logger = logging.getLogger(__name__)


class LocationProvider(ABC):
    """Abstract base class for location providers."""

    @abstractmethod
    def get_location(self) -> Coordinates:
        """Return the caller's current location.

        Raises:
            LocationUnavailableError: If the location cannot be determined.
        """


class FixedLocationProvider(LocationProvider):
    """Provider returning coordinates reported by the client.

    Args:
        latitude: Reported latitude, or None if the client sent none.
        longitude: Reported longitude, or None if the client sent none.
    """

    def __init__(self, latitude: Optional[float], longitude: Optional[float]):
        self.latitude = latitude
        self.longitude = longitude

    def get_location(self) -> Coordinates:
        if self.latitude is None or self.longitude is None:
            logger.warning("No coordinates reported by client")
            raise LocationUnavailableError()

        try:
            return Coordinates(latitude=self.latitude, longitude=self.longitude)
        except ValidationError as e:
            logger.warning(
                "Client reported invalid coordinates",
                extra={"latitude": self.latitude, "longitude": self.longitude},
            )
            raise LocationUnavailableError(
                details={"latitude": self.latitude, "longitude": self.longitude}
            ) from e
