"""ORM Models — SQLAlchemy declarative models for all catalog and commerce records.

Invariants:
    - All models inherit from Base (db/base.py)
    - Cross-record references are plain UUID columns; integrity is enforced by
      the write adapters, not by database foreign keys

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / alembic
"""

from storefront.models.category import Category  # noqa: F401
from storefront.models.sub_category import SubCategory  # noqa: F401
from storefront.models.brand import Brand  # noqa: F401
from storefront.models.variant_type import VariantType  # noqa: F401
from storefront.models.variant import Variant  # noqa: F401
from storefront.models.product import Product, ProductVariantLink  # noqa: F401
from storefront.models.coupon import Coupon  # noqa: F401
from storefront.models.poster import Poster  # noqa: F401
from storefront.models.order import Order  # noqa: F401
from storefront.models.notification import Notification  # noqa: F401
