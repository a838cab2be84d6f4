"""Product model - a sellable piece shown in the gallery."""

from sqlalchemy import Boolean, Integer, Text, Uuid
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from woodshop.models.base import Base, TimestampMixin


class Product(Base, TimestampMixin):
    """Product row as stored.

    Maps to the `products` table. `wood_type_id` and `item_type_id` carry no
    foreign key constraint: deleting a type leaves a dangling id, which the
    projection treats as unclassified.

    Images live in `image_urls`; older rows only have `image_url`.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        server_default=func.gen_random_uuid(),
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    materials: Mapped[str | None] = mapped_column(Text, nullable=True)
    dimensions: Mapped[str | None] = mapped_column(Text, nullable=True)
    weight: Mapped[str | None] = mapped_column(Text, nullable=True)
    care_instructions: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Commerce
    price_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    buy_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Classification
    wood_type_id: Mapped[str | None] = mapped_column(Uuid(as_uuid=False), nullable=True, index=True)
    item_type_id: Mapped[str | None] = mapped_column(Uuid(as_uuid=False), nullable=True, index=True)
    size_label: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Media
    image_urls: Mapped[list[str] | None] = mapped_column(ARRAY(Text), nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    is_in_stock: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sort_order: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}')>"
