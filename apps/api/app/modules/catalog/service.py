import random
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from app.core.errors import raise_http_error
from app.modules.storage.json_files import JsonListFile
from app.schemas.shop import ProductDraft

PICSUM_MAX_IMAGE_ID = 1084


def _json_number(value: Decimal) -> int | float:
    return int(value) if value == value.to_integral_value() else float(value)


def product_price(product: dict[str, Any]) -> Decimal:
    """The product price as a positive finite Decimal, or a 400."""
    try:
        price = Decimal(str(product.get("price")))
    except InvalidOperation:
        raise_http_error(400, "INVALID_PRICE", "Product price must be a positive number")
    if not price.is_finite() or price <= 0:
        raise_http_error(400, "INVALID_PRICE", "Product price must be a positive number")
    return price


class ProductCatalog:
    def __init__(self, path: Path, *, rng: random.Random | None = None) -> None:
        self._file = JsonListFile(path)
        self._rng = rng or random.Random()

    def all(self) -> list[dict[str, Any]]:
        return self._file.load()

    def search(self, query: str) -> list[dict[str, Any]]:
        return [
            product
            for product in self.all()
            if query in str(product.get("title", "")) or query in str(product.get("description", ""))
        ]

    def find(self, product_id: str | int) -> dict[str, Any] | None:
        for product in self.all():
            if str(product.get("id")) == str(product_id):
                return product
        return None

    def get(self, product_id: str | int) -> dict[str, Any]:
        product = self.find(product_id)
        if product is None:
            raise_http_error(404, "PRODUCT_NOT_FOUND", f"Product with id {product_id} not found")
        return product

    def add(self, draft: ProductDraft, *, default_seller_wallet: str) -> dict[str, Any]:
        fields = draft.model_dump(by_alias=True, exclude_none=True)
        fields["price"] = _json_number(draft.price)
        image_id = self._rng.randint(1, PICSUM_MAX_IMAGE_ID)

        def insert(products: list[dict[str, Any]]) -> dict[str, Any]:
            next_id = max((int(product["id"]) for product in products), default=0) + 1
            product = {
                "id": next_id,
                "sellerWalletAddress": default_seller_wallet,
                **fields,
                "image": f"https://picsum.photos/id/{image_id}/400/300",
            }
            products.append(product)
            return product

        return self._file.update(insert)
