"""Persistence for the shop catalog.

The catalog is a single value: the whole list of shops serialized as JSON
under one well-known key of a small key-value store. The key-value store
itself is a JSON object kept in one file on disk.

Every catalog operation is a full read-modify-write of that value. There is
no locking; concurrent writers can lose updates.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from locallens.catalog.models import Product, Shop

# Configure module logger
logger = logging.getLogger(__name__)

# Key under which the shop list is stored
SHOPS_KEY = "local_lens_shops"

# Default location of the key-value store file
DEFAULT_STORE_PATH = "data/local_lens_store.json"

_shop_list_adapter = TypeAdapter(List[Shop])


class KeyValueStore:
    """String key-value store backed by a JSON file.

    Mirrors the browser local storage API: values are strings, a missing
    key reads as None, and writes replace the whole value.
    """

    def __init__(self, path: str = DEFAULT_STORE_PATH):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(
                "Failed to read key-value store",
                extra={"store_path": str(self.path), "error": str(e)},
            )
            return {}

        if not isinstance(data, dict):
            logger.error(
                "Key-value store is not a JSON object",
                extra={"store_path": str(self.path)},
            )
            return {}

        return data

    def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if absent."""
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value.

        Raises:
            OSError: If the store file cannot be written.
        """
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        """Remove key from the store if present."""
        data = self._read_all()
        if key not in data:
            return
        del data[key]
        self._write_all(data)

    def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data), encoding="utf-8")
        tmp_path.replace(self.path)


class CatalogStorage:
    """Load and save the shop catalog through a key-value store.

    Args:
        store: Key-value store holding the serialized catalog.
        key: Key the shop list is stored under.
    """

    def __init__(self, store: KeyValueStore, key: str = SHOPS_KEY):
        self.store = store
        self.key = key

    def get_shops(self) -> List[Shop]:
        """Return all shops.

        An absent value reads as an empty catalog. A value that cannot be
        parsed is logged and also reads as an empty catalog.
        """
        shops_json = self.store.get_item(self.key)
        if not shops_json:
            return []

        try:
            return _shop_list_adapter.validate_json(shops_json)
        except ValidationError as e:
            logger.error(
                "Failed to parse shops from store",
                extra={"key": self.key, "error": str(e)},
            )
            return []

    def save_shops(self, shops: List[Shop]) -> bool:
        """Overwrite the stored catalog with shops.

        Write failures are logged and leave the previous value in place.

        Returns:
            True if the catalog was written, False if the write failed.
        """
        shops_json = _shop_list_adapter.dump_json(shops, by_alias=True).decode("utf-8")
        try:
            self.store.set_item(self.key, shops_json)
        except OSError as e:
            logger.error(
                "Failed to save shops to store",
                extra={"key": self.key, "error": str(e)},
                exc_info=True,
            )
            return False

        logger.debug("Saved shops", extra={"num_shops": len(shops)})
        return True

    def clear(self) -> None:
        """Remove the stored catalog entirely."""
        self.store.remove_item(self.key)
        logger.info("Cleared catalog", extra={"key": self.key})

    def get_shop_by_id(self, shop_id: str) -> Optional[Shop]:
        """Return the shop with shop_id, or None if it is not in the catalog."""
        for shop in self.get_shops():
            if shop.id == shop_id:
                return shop
        return None

    def save_shop(self, shop: Shop) -> bool:
        """Insert shop, or replace the stored shop with the same id.

        Returns:
            True if the catalog was written, False if the write failed.
        """
        shops = self.get_shops()
        for idx, existing in enumerate(shops):
            if existing.id == shop.id:
                shops[idx] = shop
                break
        else:
            shops.append(shop)

        if not self.save_shops(shops):
            return False
        logger.info("Saved shop", extra={"shop_id": shop.id})
        return True

    def add_product_to_shop(self, shop_id: str, product: Product) -> bool:
        """Append product to the shop with shop_id.

        The catalog is left untouched when no shop has that id.

        Returns:
            True if the product was stored. False if the shop was not found
            or the catalog could not be written.
        """
        shops = self.get_shops()
        for shop in shops:
            if shop.id == shop_id:
                shop.products.append(product)
                if not self.save_shops(shops):
                    return False
                logger.info(
                    "Added product to shop",
                    extra={"shop_id": shop_id, "product_id": product.id},
                )
                return True

        logger.error(f"Shop with id {shop_id} not found.")
        return False
