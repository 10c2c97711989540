"""Catalog Writers — categories, sub-categories, brands, variant types, variants.

Invariants:
    - Category delete refused while sub-categories or products reference it
    - SubCategory delete refused while brands or products reference it
    - Brand delete refused while products reference it
    - VariantType names are unique; delete refused while variants or products reference it
    - Variant names are unique within their variant type; delete refused while
      products offer it
    - Parent ids are not checked for existence on create or update
"""

from uuid import UUID

from storefront.core.domain_types import EntityType
from storefront.core.errors import ConflictError
from storefront.models.brand import Brand
from storefront.models.category import Category
from storefront.models.product import Product, ProductVariantLink
from storefront.models.sub_category import SubCategory
from storefront.models.variant import Variant
from storefront.models.variant_type import VariantType
from storefront.schemas.catalog import (
    BrandRead, CategoryRead, SubCategoryRead, VariantRead, VariantTypeRead,
)
from storefront.services.write_adapter import WriteAdapter, count_where


class CategoryWriter(WriteAdapter[Category]):
    model = Category
    entity_type = EntityType.CATEGORY
    read_schema = CategoryRead
    label = "Category"

    async def _check_delete(self, record: Category) -> None:
        await self._refuse_if_referenced([
            (SubCategory, SubCategory.category_id == record.id,
             "Cannot delete category. It is associated with one or more sub-categories."),
            (Product, Product.category_id == record.id,
             "Cannot delete category. Products are referencing it."),
        ])


class SubCategoryWriter(WriteAdapter[SubCategory]):
    model = SubCategory
    entity_type = EntityType.SUB_CATEGORY
    read_schema = SubCategoryRead
    label = "Sub-category"

    async def _check_delete(self, record: SubCategory) -> None:
        await self._refuse_if_referenced([
            (Brand, Brand.sub_category_id == record.id,
             "Cannot delete sub-category. It is associated with one or more brands."),
            (Product, Product.sub_category_id == record.id,
             "Cannot delete sub-category. Products are referencing it."),
        ])


class BrandWriter(WriteAdapter[Brand]):
    model = Brand
    entity_type = EntityType.BRAND
    read_schema = BrandRead
    label = "Brand"

    async def _check_delete(self, record: Brand) -> None:
        await self._refuse_if_referenced([
            (Product, Product.brand_id == record.id,
             "Cannot delete brand. Products are referencing it."),
        ])


class VariantTypeWriter(WriteAdapter[VariantType]):
    model = VariantType
    entity_type = EntityType.VARIANT_TYPE
    read_schema = VariantTypeRead
    label = "Variant type"

    async def _ensure_name_free(self, name: str, exclude_id: UUID | None = None) -> None:
        criteria = [VariantType.name == name]
        if exclude_id is not None:
            criteria.append(VariantType.id != exclude_id)
        if await count_where(self.db, VariantType, *criteria):
            raise ConflictError("Variant type with this name already exists.")

    async def _check_create(self, fields: dict) -> None:
        await self._ensure_name_free(fields["name"])

    async def _check_update(self, record: VariantType, changes: dict) -> None:
        if "name" in changes and changes["name"] != record.name:
            await self._ensure_name_free(changes["name"], exclude_id=record.id)

    async def _check_delete(self, record: VariantType) -> None:
        await self._refuse_if_referenced([
            (Variant, Variant.variant_type_id == record.id,
             "Cannot delete variant type. It is associated with one or more variants."),
            (Product, Product.variant_type_id == record.id,
             "Cannot delete variant type. Products are referencing it."),
        ])


class VariantWriter(WriteAdapter[Variant]):
    model = Variant
    entity_type = EntityType.VARIANT
    read_schema = VariantRead
    label = "Variant"

    async def _ensure_name_free(
        self, name: str, variant_type_id: UUID, exclude_id: UUID | None = None,
    ) -> None:
        criteria = [Variant.name == name, Variant.variant_type_id == variant_type_id]
        if exclude_id is not None:
            criteria.append(Variant.id != exclude_id)
        if await count_where(self.db, Variant, *criteria):
            raise ConflictError(
                "Variant with this name already exists in this variant type.",
            )

    async def _check_create(self, fields: dict) -> None:
        await self._ensure_name_free(fields["name"], fields["variant_type_id"])

    async def _check_update(self, record: Variant, changes: dict) -> None:
        name = changes.get("name", record.name)
        variant_type_id = changes.get("variant_type_id", record.variant_type_id)
        if (name, variant_type_id) != (record.name, record.variant_type_id):
            await self._ensure_name_free(name, variant_type_id, exclude_id=record.id)

    async def _check_delete(self, record: Variant) -> None:
        await self._refuse_if_referenced([
            (ProductVariantLink, ProductVariantLink.variant_id == record.id,
             "Cannot delete variant. Products are referencing it."),
        ])
