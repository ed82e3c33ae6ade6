"""CLI script for searching the catalog with a photo.

Useful for testing and evaluation. Describes an image with the configured
description service, searches the store, and prints the matches nearest
first.
"""

import argparse
import logging
import mimetypes
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from locallens.api.exceptions import LocalLensException
from locallens.catalog.matching import parse_search_keywords
from locallens.catalog.models import SearchResult
from locallens.catalog.search import search_catalog
from locallens.catalog.shops import search_nearby
from locallens.catalog.storage import CatalogStorage, KeyValueStore
from locallens.config import get_settings
from locallens.providers.description import GeminiDescriptionProvider
from locallens.providers.location import FixedLocationProvider

# Setup logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s"
)
logger = logging.getLogger(__name__)


def run_search(
    latitude: float,
    longitude: float,
    store_path: str,
    image_path: Optional[str] = None,
    keywords: Optional[str] = None,
) -> tuple[List[str], List[SearchResult]]:
    """Search the catalog from a photo or from literal keywords.

    Args:
        latitude: Searcher latitude
        longitude: Searcher longitude
        store_path: Store file to search
        image_path: Photo to describe with the description service
        keywords: Keywords to use instead of describing a photo

    Returns:
        Tuple of (search keywords, ranked results)
    """
    storage = CatalogStorage(KeyValueStore(store_path))
    location_provider = FixedLocationProvider(latitude, longitude)

    if keywords is not None:
        search_keywords = parse_search_keywords(keywords.strip().lower())
        return search_keywords, search_catalog(
            storage.get_shops(), location_provider.get_location(), search_keywords
        )

    path = Path(image_path)
    mime_type, _ = mimetypes.guess_type(path.name)
    describer = GeminiDescriptionProvider.from_settings(get_settings())
    return search_nearby(
        storage,
        location_provider,
        describer,
        image_bytes=path.read_bytes(),
        mime_type=mime_type,
    )


def main() -> None:
    """Main CLI function."""
    parser = argparse.ArgumentParser(
        description="Find products resembling a photo in nearby shops",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/search_cli.py --lat 51.50 --lon -0.12 --image shirt.jpg
  python scripts/search_cli.py --lat 51.50 --lon -0.12 --keywords "blue striped shirt"
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--image",
        type=str,
        help="Photo of the product to look for"
    )
    source.add_argument(
        "--keywords",
        type=str,
        help="Search keywords, skipping the description service"
    )

    parser.add_argument("--lat", type=float, required=True, help="Your latitude")
    parser.add_argument("--lon", type=float, required=True, help="Your longitude")

    parser.add_argument(
        "--store",
        type=str,
        default=None,
        help="Store file (default: from settings)"
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    try:
        search_keywords, results = run_search(
            latitude=args.lat,
            longitude=args.lon,
            store_path=args.store or get_settings().store_path,
            image_path=args.image,
            keywords=args.keywords,
        )
    except LocalLensException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"\nKeywords: {' '.join(search_keywords)}")

    if not results:
        print("No Matches Found")
        print()
        return

    print(f"  {len(results)} matches:")
    for result in results:
        print(
            f"  {result.distance:.2f} km away  {result.name}  "
            f"({result.shop_name})  {result.maps_url}"
        )

    print()


if __name__ == "__main__":
    main()
