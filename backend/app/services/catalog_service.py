# app/services/catalog_service.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from app.db.catalog_store import CatalogStore
from app.db.serialize import to_jsonable


def attach_categories(
    products: Iterable[Dict[str, Any]],
    categories_by_id: Dict[str, Dict[str, Any]],
) -> List[Dict[str, Any]]:
    """
    Left join products onto categories in memory.
    category is None when category_id is missing or points nowhere.
    """
    out: List[Dict[str, Any]] = []
    for p in products:
        ref = p.get("category_id")
        category: Optional[Dict[str, Any]] = None
        if ref is not None:
            category = categories_by_id.get(str(ref))
        out.append({**p, "category": category})
    return out


class CatalogService:
    def __init__(self, store: CatalogStore):
        self.store = store

    def products(self) -> List[Dict[str, Any]]:
        return self._with_categories(self.store.list_products())

    def featured_products(self) -> List[Dict[str, Any]]:
        return self._with_categories(self.store.list_products(featured_only=True))

    def categories(self) -> List[Dict[str, Any]]:
        return to_jsonable(self.store.list_categories())

    def testimonials(self) -> List[Dict[str, Any]]:
        return to_jsonable(self.store.list_active_testimonials())

    def _with_categories(self, products: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        joined = attach_categories(products, self.store.category_map())
        return to_jsonable(joined)
