"""
BioBizz Product Catalogue
=========================

Immutable reference data for the nine BioBizz products used by the dosing
schedule. Catalogue order is significant: dosage plans list products in
this order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.enums.nutrients import ProductCategory


@dataclass(frozen=True)
class Product:
    """A BioBizz nutrient product."""

    id: str
    name: str
    short_name: str
    description: str
    npk: str | None
    product_type: str
    category: ProductCategory
    ml_min: float
    ml_max: float
    color: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "short_name": self.short_name,
            "description": self.description,
            "npk": self.npk,
            "type": self.product_type,
            "category": str(self.category),
            "ml_range": {"min": self.ml_min, "max": self.ml_max},
            "color": self.color,
        }


PRODUCTS: tuple[Product, ...] = (
    Product(
        id="bio-grow",
        name="Bio-Grow",
        short_name="Grow",
        description="Organic growth fertiliser for the vegetative phase",
        npk="8-2-6",
        product_type="base-grow",
        category=ProductCategory.BASIS,
        ml_min=1,
        ml_max=4,
        color="#10b981",
    ),
    Product(
        id="bio-bloom",
        name="Bio-Bloom",
        short_name="Bloom",
        description="Organic bloom fertiliser for the flowering phase",
        npk="2-6-3.5",
        product_type="base-bloom",
        category=ProductCategory.BASIS,
        ml_min=1,
        ml_max=4,
        color="#ec4899",
    ),
    Product(
        id="top-max",
        name="Top-Max",
        short_name="TopMax",
        description="Bloom stimulator for bigger, heavier flowers",
        npk="0.2-0.1-0.3",
        product_type="stimulator",
        category=ProductCategory.STIMULATOR,
        ml_min=1,
        ml_max=4,
        color="#f59e0b",
    ),
    Product(
        id="root-juice",
        name="Root-Juice",
        short_name="Root",
        description="Root stimulator for vigorous root growth",
        npk=None,
        product_type="root",
        category=ProductCategory.STIMULATOR,
        ml_min=1,
        ml_max=4,
        color="#8b5cf6",
    ),
    Product(
        id="bio-heaven",
        name="Bio-Heaven",
        short_name="Heaven",
        description="Energy booster with amino acids",
        npk=None,
        product_type="booster",
        category=ProductCategory.BOOSTER,
        ml_min=2,
        ml_max=5,
        color="#06b6d4",
    ),
    Product(
        id="acti-vera",
        name="Acti-Vera",
        short_name="Acti",
        description="Plant vitality and immune system booster",
        npk=None,
        product_type="vitality",
        category=ProductCategory.BOOSTER,
        ml_min=1,
        ml_max=5,
        color="#22c55e",
    ),
    Product(
        id="alg-a-mic",
        name="Alg-A-Mic",
        short_name="Alga",
        description="Seaweed based anti-stress and recovery product",
        npk=None,
        product_type="stress",
        category=ProductCategory.BOOSTER,
        ml_min=1,
        ml_max=4,
        color="#3b82f6",
    ),
    Product(
        id="fish-mix",
        name="Fish-Mix",
        short_name="Fish",
        description="Organic growth fertiliser made from fish emulsion",
        npk="5-1-4",
        product_type="growth-alt",
        category=ProductCategory.BASIS,
        ml_min=1,
        ml_max=4,
        color="#f97316",
    ),
    Product(
        id="calmag",
        name="CalMag",
        short_name="CalMag",
        description="Calcium and magnesium supplement",
        npk=None,
        product_type="supplement",
        category=ProductCategory.SUPPLEMENT,
        ml_min=1,
        ml_max=2,
        color="#a855f7",
    ),
)

PRODUCT_IDS: tuple[str, ...] = tuple(p.id for p in PRODUCTS)

_PRODUCTS_BY_ID: dict[str, Product] = {p.id: p for p in PRODUCTS}


def get_product_by_id(product_id: str) -> Product | None:
    """Return the product with ``product_id`` or ``None``."""
    return _PRODUCTS_BY_ID.get(product_id)


def is_known_product(product_id: str) -> bool:
    return product_id in _PRODUCTS_BY_ID
