from typing import Literal, Optional
from pydantic import BaseModel, Field

Unit = Literal["pieces", "bottles"]


class Location(BaseModel):
    """A physical place that gets counted once per session, in `order`."""

    id: str
    name: str
    order: int = Field(..., ge=1)

    class Config:
        frozen = True


class CategoryRule(BaseModel):
    """Where the items of one catalog category are stored and counted."""

    location_id: str
    unit: Optional[Unit] = None
    overflow: bool = True

    class Config:
        frozen = True


class Item(BaseModel):
    """
    A countable stock record: one product at one location.
    Split products share `name` and differ only by `id` and `location_id`.
    """

    id: str
    name: str
    minimum_stock: int = Field(..., ge=0)
    location_id: str
    category: str = ""
    unit: Unit = "pieces"

    class Config:
        frozen = True


class Product(BaseModel):
    """The logical beverage behind one display name, owning its stock records."""

    name: str
    category: str = ""
    unit: Unit = "pieces"
    minimum_stock: int = Field(..., ge=0)
    stocks: list[Item] = Field(default_factory=list)

    @property
    def item_ids(self) -> list[str]:
        return [item.id for item in self.stocks]

    class Config:
        frozen = True


class Count(BaseModel):
    """A recorded quantity, unique per (item_id, location_id, round)."""

    item_id: str
    location_id: str
    round: int = Field(..., ge=1)
    quantity: int = Field(default=0, ge=0)

    @property
    def key(self) -> tuple[str, str, int]:
        return (self.item_id, self.location_id, self.round)


class AggregatedTotal(BaseModel):
    """
    One row of the overview table and of the CSV export.
    Aliases match the export header.
    """

    item_id: str
    name: str = Field(..., alias="Name")
    category: str = Field(default="", alias="Category")
    unit: Unit = "pieces"
    total: int = Field(default=0, ge=0, alias="Total")
    minimum_stock: int = Field(default=0, ge=0, alias="Minimum")
    to_order: int = Field(default=0, ge=0, alias="ToOrder")

    class Config:
        populate_by_name = True
        frozen = True


class RoundView(BaseModel):
    """Counts entered for the items of one location during its round."""

    round: int = Field(..., ge=1)
    location_id: str
    counted: list[Count] = Field(default_factory=list)


class LocationCount(BaseModel):
    """One line of the product detail popup."""

    location_id: str
    location_name: str
    item_id: str
    quantity: int = Field(default=0, ge=0)


class Catalog(BaseModel):
    locations: list[Location] = Field(default_factory=list)
    items: list[Item] = Field(default_factory=list)

    class Config:
        frozen = True
