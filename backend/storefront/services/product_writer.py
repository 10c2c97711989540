"""Product Writer — products with their image slots and offered variants.

Invariants:
    - variant_ids are stored as owned link rows; updating variant_ids replaces
      the whole set, omitting it leaves the set untouched
    - an images update merges by slot: sent slots replace stored ones with the
      same number, unsent slots are kept
    - delete removes the link rows with the product
"""

from uuid import UUID

from storefront.core.domain_types import EntityType
from storefront.models.product import Product, ProductVariantLink
from storefront.schemas.product import ProductRead
from storefront.services.write_adapter import WriteAdapter, column_values


def merge_images(stored: list[dict], incoming: list[dict]) -> list[dict]:
    """Slot-wise merge, ordered by slot number."""
    by_slot = {img["image"]: img for img in stored}
    for img in incoming:
        by_slot[img["image"]] = {"image": img["image"], "url": img["url"]}
    return [by_slot[slot] for slot in sorted(by_slot)]


def _links(variant_ids: list[UUID]) -> list[ProductVariantLink]:
    # dict.fromkeys keeps order and drops repeats
    return [ProductVariantLink(variant_id=vid) for vid in dict.fromkeys(variant_ids)]


class ProductWriter(WriteAdapter[Product]):
    model = Product
    entity_type = EntityType.PRODUCT
    read_schema = ProductRead
    label = "Product"

    def _build(self, fields: dict) -> Product:
        fields = dict(fields)
        variant_ids = fields.pop("variant_ids", None) or []
        product = super()._build(fields)
        product.variant_links = _links(variant_ids)
        return product

    def _apply(self, record: Product, changes: dict) -> None:
        changes = dict(changes)
        if "variant_ids" in changes:
            record.variant_links = _links(changes.pop("variant_ids") or [])
        if "images" in changes:
            record.images = merge_images(record.images or [], changes.pop("images") or [])
        for key, value in column_values(changes).items():
            setattr(record, key, value)
