"""Product bundle loading: a JSON file or a directory of JSON/YAML product files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from rtcatalog.config import get_settings
from rtcatalog.schemas.models import ProductRecord

logger = logging.getLogger(__name__)

_SUFFIXES = {".json", ".yaml", ".yml"}


class ProductLoadError(Exception):
    """Raised when the product bundle cannot be read at all."""


def _read_file(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ProductLoadError(f"Could not parse {path}: {e}") from e
    except OSError as e:
        raise ProductLoadError(f"Could not read {path}: {e}") from e


def _raw_records(data: Any, source: Path) -> list[dict[str, Any]]:
    if isinstance(data, dict) and isinstance(data.get("products"), list):
        data = data["products"]
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return [r for r in data if isinstance(r, dict)]
    if data is None:
        return []
    raise ProductLoadError(f"{source}: expected a product object or a list of products")


def parse_products(raw: list[dict[str, Any]], source: str = "<memory>") -> list[ProductRecord]:
    """Validate raw records; invalid ones and repeated ids are skipped with a warning."""
    products: list[ProductRecord] = []
    seen: set[str] = set()
    for i, record in enumerate(raw):
        try:
            product = ProductRecord.model_validate(record)
        except ValidationError as e:
            logger.warning("Skipping product #%d in %s: %s", i, source, e.errors()[:3])
            continue
        if product.id in seen:
            logger.warning("Skipping duplicate product id %r in %s", product.id, source)
            continue
        seen.add(product.id)
        products.append(product)
    return products


def load_products(path: Path | str) -> list[ProductRecord]:
    """Load every product from a file or (recursively) from a directory, in path order."""
    path = Path(path)
    if not path.exists():
        raise ProductLoadError(f"Product bundle not found: {path}")

    if path.is_dir():
        files = sorted(p for p in path.rglob("*") if p.is_file() and p.suffix in _SUFFIXES)
    else:
        files = [path]

    raw: list[dict[str, Any]] = []
    for f in files:
        raw.extend(_raw_records(_read_file(f), f))
    products = parse_products(raw, source=str(path))
    logger.info("Loaded %d products from %s", len(products), path)
    return products


class ProductRepository:
    """In-memory product collection, loaded wholesale; read-only."""

    def __init__(self, products: list[ProductRecord]):
        self._products = list(products)
        self._by_id = {p.id: p for p in self._products}

    @classmethod
    def from_path(cls, path: Path | str) -> "ProductRepository":
        return cls(load_products(path))

    def all(self) -> list[ProductRecord]:
        return list(self._products)

    def get(self, product_id: str) -> ProductRecord | None:
        return self._by_id.get(product_id)

    def __len__(self) -> int:
        return len(self._products)


_repository: ProductRepository | None = None


def get_product_repository() -> ProductRepository:
    """Return the singleton repository for RTCAT_PRODUCTS_PATH (empty if the bundle is missing)."""
    global _repository
    if _repository is not None:
        return _repository
    settings = get_settings()
    try:
        _repository = ProductRepository.from_path(settings.products_path)
    except ProductLoadError as e:
        logger.warning("Product bundle unavailable (%s), serving an empty catalog", e)
        _repository = ProductRepository([])
    return _repository
