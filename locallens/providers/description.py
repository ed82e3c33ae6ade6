"""Image description providers.

Turns a product photo into a short lowercase keyword string used as the
search index for that photo. The production provider calls the Gemini
``generateContent`` REST endpoint over httpx.
"""

import base64
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from locallens.api.exceptions import ImageAnalysisError
from locallens.config import Settings

logger = logging.getLogger(__name__)

DESCRIPTION_PROMPT = (
    "Describe this product for a search index. Use 3-5 distinct keywords "
    "focusing ONLY on item type, color, and pattern. Do not use sentences. "
    "Example: 'blue striped t-shirt'. Another example: 'black leather boots'."
)


class ImageDescriptionProvider(ABC):
    """Abstract base class for image description providers."""

    @abstractmethod
    def describe(self, image_bytes: bytes, mime_type: str) -> str:
        """Describe an image as lowercase space-separated keywords.

        Args:
            image_bytes: Raw image payload.
            mime_type: Mime type of the payload, e.g. "image/jpeg".

        Returns:
            Non-empty lowercase keyword string.

        Raises:
            ImageAnalysisError: If the image cannot be described.
        """


class GeminiDescriptionProvider(ImageDescriptionProvider):
    """Provider using the Gemini REST API.

    Args:
        api_key: Gemini API key. Calls fail without one.
        model: Model name, e.g. "gemini-2.5-flash".
        base_url: REST API root.
        timeout: Request timeout in seconds.
        client: Optional preconfigured httpx client.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        if not api_key:
            logger.warning(
                "API key not set. Image description calls will fail."
            )
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(timeout=httpx.Timeout(timeout, connect=10.0))

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiDescriptionProvider":
        return cls(
            api_key=settings.api_key,
            model=settings.description_model,
            base_url=settings.description_base_url,
            timeout=settings.description_timeout,
        )

    def _build_payload(self, image_bytes: bytes, mime_type: str) -> Dict[str, Any]:
        return {
            "contents": [
                {
                    "parts": [
                        {
                            "inline_data": {
                                "mime_type": mime_type,
                                "data": base64.b64encode(image_bytes).decode("ascii"),
                            }
                        },
                        {"text": DESCRIPTION_PROMPT},
                    ]
                }
            ]
        }

    @staticmethod
    def _extract_text(body: Dict[str, Any]) -> str:
        parts = body["candidates"][0]["content"]["parts"]
        return "".join(part.get("text", "") for part in parts)

    def describe(self, image_bytes: bytes, mime_type: str) -> str:
        try:
            if not self.api_key:
                raise ValueError("API key is not configured")

            response = self.client.post(
                f"{self.base_url}/models/{self.model}:generateContent",
                headers={"x-goog-api-key": self.api_key},
                json=self._build_payload(image_bytes, mime_type),
            )
            response.raise_for_status()

            description = self._extract_text(response.json()).strip().lower()
            if not description:
                raise ValueError("Gemini API returned an empty description.")

        except (
            httpx.HTTPError,
            AttributeError,
            KeyError,
            IndexError,
            TypeError,
            ValueError,
        ) as e:
            logger.error(
                "Error generating image description with Gemini",
                extra={
                    "model": self.model,
                    "mime_type": mime_type,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            )
            raise ImageAnalysisError(e) from e

        logger.info(
            "Image described",
            extra={"model": self.model, "description": description},
        )
        return description
