"""Generate a fake shop catalog for testing and development.

Creates shops scattered around a centre point, each listing products whose
keyword strings look like what the image description service returns, and
writes them to the LocalLens store.

Example:
    Run the script directly to seed the default store:
        $ python scripts/seed_demo_catalog.py --lat 51.5074 --lon -0.1278

    Or import and use programmatically:
        from scripts.seed_demo_catalog import generate_fake_shops
        shops = generate_fake_shops(num_shops=10)
"""

import argparse
import math
import random
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from locallens.catalog.models import Coordinates, Product, Shop
from locallens.catalog.storage import CatalogStorage, KeyValueStore
from locallens.config import get_settings

# Default configuration constants
DEFAULT_NUM_SHOPS = 10
DEFAULT_PRODUCTS_PER_SHOP = 5
DEFAULT_RADIUS_KM = 5.0
KM_PER_DEGREE_LAT = 111.32

COLORS = ["red", "blue", "black", "white", "green", "yellow", "brown", "grey"]
PATTERNS = ["striped", "plain", "checked", "floral", "dotted", "leather"]
ITEM_TYPES = ["t-shirt", "shirt", "boots", "hat", "dress", "jacket", "scarf", "bag"]

# 1x1 transparent PNG
PLACEHOLDER_IMAGE_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


def random_point_near(
    center: Coordinates, radius_km: float, rng: random.Random
) -> Coordinates:
    """Return a random point within radius_km of center."""
    distance_km = radius_km * math.sqrt(rng.random())
    bearing = rng.uniform(0, 2 * math.pi)

    dlat = (distance_km * math.cos(bearing)) / KM_PER_DEGREE_LAT
    dlon = (distance_km * math.sin(bearing)) / (
        KM_PER_DEGREE_LAT * max(math.cos(math.radians(center.latitude)), 1e-6)
    )

    return Coordinates(
        latitude=max(-90.0, min(90.0, center.latitude + dlat)),
        longitude=((center.longitude + dlon + 180.0) % 360.0) - 180.0,
    )


def generate_fake_shops(
    num_shops: int = DEFAULT_NUM_SHOPS,
    products_per_shop: int = DEFAULT_PRODUCTS_PER_SHOP,
    center: Optional[Coordinates] = None,
    radius_km: float = DEFAULT_RADIUS_KM,
    seed: Optional[int] = None,
) -> List[Shop]:
    """Generate synthetic shops with products around a centre point.

    Args:
        num_shops: Number of shops to create. Must be positive.
        products_per_shop: Products listed per shop. Must be non-negative.
        center: Centre of the area. Defaults to central London.
        radius_km: Shops are placed uniformly within this radius.
        seed: Random seed for reproducibility.

    Returns:
        List of shops with ids ``demo-shop-<n>``.

    Raises:
        ValueError: If num_shops is not positive or products_per_shop or
            radius_km is negative.
    """
    if num_shops <= 0:
        raise ValueError("num_shops must be positive")
    if products_per_shop < 0 or radius_km < 0:
        raise ValueError("products_per_shop and radius_km must be non-negative")

    if center is None:
        center = Coordinates(latitude=51.5074, longitude=-0.1278)

    rng = random.Random(seed)
    shops = []

    for shop_idx in range(1, num_shops + 1):
        products = []
        for product_idx in range(1, products_per_shop + 1):
            color = rng.choice(COLORS)
            pattern = rng.choice(PATTERNS)
            item_type = rng.choice(ITEM_TYPES)
            products.append(
                Product(
                    id=f"prod_demo_{shop_idx}_{product_idx}",
                    name=f"{color.title()} {pattern.title()} {item_type.title()}",
                    image_base64=PLACEHOLDER_IMAGE_BASE64,
                    mime_type="image/png",
                    search_keywords=f"{color} {pattern} {item_type}",
                )
            )

        shops.append(
            Shop(
                id=f"demo-shop-{shop_idx}",
                name=f"Demo Shop {shop_idx}",
                location=random_point_near(center, radius_km, rng),
                products=products,
            )
        )

    return shops


def shops_to_frame(shops: List[Shop]) -> pd.DataFrame:
    """Flatten shops into one row per listed product."""
    rows = [
        {
            "shop_id": shop.id,
            "shop_name": shop.name,
            "latitude": shop.location.latitude,
            "longitude": shop.location.longitude,
            "product_id": product.id,
            "product_name": product.name,
            "search_keywords": product.search_keywords,
        }
        for shop in shops
        for product in shop.products
    ]
    return pd.DataFrame(
        rows,
        columns=[
            "shop_id",
            "shop_name",
            "latitude",
            "longitude",
            "product_id",
            "product_name",
            "search_keywords",
        ],
    )


def main() -> None:
    """Main entry point for the seeding script.

    Generates fake shops and writes them to the configured store, then
    prints a preview and summary statistics.
    """
    parser = argparse.ArgumentParser(description="Seed the LocalLens store with demo shops")
    parser.add_argument("--lat", type=float, default=51.5074, help="Centre latitude")
    parser.add_argument("--lon", type=float, default=-0.1278, help="Centre longitude")
    parser.add_argument("--num-shops", type=int, default=DEFAULT_NUM_SHOPS)
    parser.add_argument("--products-per-shop", type=int, default=DEFAULT_PRODUCTS_PER_SHOP)
    parser.add_argument("--radius-km", type=float, default=DEFAULT_RADIUS_KM)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--store", type=str, default=None, help="Store file (default: from settings)")
    parser.add_argument("--reset", action="store_true", help="Remove existing shops first")
    args = parser.parse_args()

    print(f"Generating {args.num_shops} demo shops...")

    try:
        shops = generate_fake_shops(
            num_shops=args.num_shops,
            products_per_shop=args.products_per_shop,
            center=Coordinates(latitude=args.lat, longitude=args.lon),
            radius_km=args.radius_km,
            seed=args.seed,
        )
    except ValueError as e:
        print(f"Error generating data: {e}")
        return

    store_path = args.store or get_settings().store_path
    storage = CatalogStorage(KeyValueStore(store_path))
    if args.reset:
        storage.clear()
    for shop in shops:
        storage.save_shop(shop)

    df = shops_to_frame(shops)

    print(f"\nCatalog seeded successfully!")
    print(f"Saved to: {store_path}")
    print(f"\nData preview:")
    print(df.head(10))
    print(f"\nData summary:")
    print(f"  Shops: {df['shop_id'].nunique()}")
    print(f"  Products: {len(df)}")
    print(f"  Distinct keyword strings: {df['search_keywords'].nunique()}")


if __name__ == '__main__':
    main()
