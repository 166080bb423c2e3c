from typing import Any, Dict, List, Optional

from app.validators.common import (
    FieldRule,
    is_below,
    is_non_blank_string,
    is_non_negative_integer,
    is_non_negative_number,
    run_rules,
    to_number,
)

DIMENSION_KEYS = ("length", "width", "height")

# Largest values the price, stock and weight columns can hold.
MAX_PRICE = 10 ** 8
MAX_STOCK = 2 ** 31 - 1
MAX_WEIGHT = 10 ** 6
STOCK_TOO_LARGE = f"Stock cannot exceed {MAX_STOCK}"


def _is_name(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) >= 2


def _optional(check):
    def wrapped(value: Any) -> bool:
        return value is None or check(value)
    return wrapped


def _is_tag_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(tag, str) for tag in value)


# Order matters: messages are reported in exactly this sequence.
PRODUCT_RULES = [
    FieldRule("name", _is_name, "Name must be at least 2 characters long", required="Name is required"),
    FieldRule("price", is_non_negative_number, "Price must be a non-negative number", required="Price is required"),
    FieldRule("price", is_below(MAX_PRICE), f"Price must be less than {MAX_PRICE}"),
    FieldRule("sku", is_non_blank_string, "SKU cannot be empty", required="SKU is required"),
    FieldRule("category", is_non_blank_string, "Category cannot be empty", required="Category is required"),
    FieldRule("stock", is_non_negative_integer, "Stock must be a non-negative integer"),
    FieldRule("stock", is_below(MAX_STOCK + 1), STOCK_TOO_LARGE),
    FieldRule("weight", _optional(is_non_negative_number), "Weight must be a non-negative number"),
    FieldRule("weight", is_below(MAX_WEIGHT), f"Weight must be less than {MAX_WEIGHT}"),
    FieldRule("dimensions", _optional(lambda v: isinstance(v, dict)), "Dimensions must be an object"),
] + [
    FieldRule(
        f"dimensions.{key}",
        _optional(is_non_negative_number),
        f"Dimensions {key} must be a non-negative number",
    )
    for key in DIMENSION_KEYS
] + [
    FieldRule("tags", _optional(_is_tag_list), "Tags must be a list of strings"),
    FieldRule("description", _optional(lambda v: isinstance(v, str)), "Description must be a string"),
    FieldRule("isActive", lambda v: isinstance(v, bool), "isActive must be a boolean"),
]


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(to_number(value))


class ProductRequest:
    """
    Product payload as sent by clients (camelCase keys).

    ``validate`` returns every violated rule in a fixed order; ``to_fields``
    turns an already validated payload into model column values.
    """

    partial = False

    def __init__(self, payload: Dict[str, Any]):
        self.payload = payload or {}

    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> "ProductRequest":
        return cls(body)

    def validate(self) -> List[str]:
        return run_rules(self.payload, PRODUCT_RULES, partial=self.partial)

    @property
    def sku(self) -> Optional[str]:
        sku = self.payload.get("sku")
        return sku.strip() if isinstance(sku, str) else None

    def to_fields(self) -> Dict[str, Any]:
        body = self.payload
        fields: Dict[str, Any] = {}

        for key in ("name", "sku", "category"):
            if key in body:
                fields[key] = body[key].strip()
        if "description" in body:
            fields["description"] = body["description"]
        if "price" in body:
            fields["price"] = _to_float(body["price"])
        if "stock" in body:
            fields["stock"] = int(to_number(body["stock"]))
        if "isActive" in body:
            fields["is_active"] = body["isActive"]
        if "weight" in body:
            fields["weight"] = _to_float(body["weight"])
        if "dimensions" in body:
            dimensions = body["dimensions"] or {}
            cleaned = {
                key: _to_float(dimensions[key])
                for key in DIMENSION_KEYS
                if dimensions.get(key) is not None
            }
            fields["dimensions"] = cleaned or None
        if "tags" in body:
            fields["tags"] = list(body["tags"] or [])

        if not self.partial:
            fields.setdefault("stock", 0)
            fields.setdefault("is_active", True)
            fields.setdefault("tags", [])
        return fields


class ProductUpdateRequest(ProductRequest):
    """Partial update: only the supplied fields are validated and written."""

    partial = True
