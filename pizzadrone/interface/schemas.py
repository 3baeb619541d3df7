"""Mini README: Pydantic request bodies for the HTTP interface.

Field aliases follow the camelCase JSON used by API clients. Every field
is optional at the schema level so that missing data is reported by the
endpoint with a descriptive 400 response instead of a generic schema error.
Conversion helpers turn bodies into the domain dataclasses.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..orders import CreditCardInformation, Order, Pizza
from ..route_planning import LngLat, NamedRegion


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PositionBody(_CamelModel):
    lng: Optional[float] = None
    lat: Optional[float] = None

    def is_valid(self) -> bool:
        """Coordinates must be present and within longitude/latitude range."""

        return (
            self.lng is not None
            and self.lat is not None
            and -180.0 <= self.lng <= 180.0
            and -90.0 <= self.lat <= 90.0
        )

    def to_lnglat(self) -> LngLat:
        return LngLat(self.lng, self.lat)


class PositionPairRequest(_CamelModel):
    position1: Optional[PositionBody] = None
    position2: Optional[PositionBody] = None


class NextPositionRequest(_CamelModel):
    start: Optional[PositionBody] = None
    angle: Optional[float] = None


class RegionBody(_CamelModel):
    name: Optional[str] = None
    vertices: Optional[List[PositionBody]] = None

    def to_region(self) -> NamedRegion:
        return NamedRegion(
            name=self.name or "",
            vertices=[vertex.to_lnglat() for vertex in self.vertices or []],
        )


class IsInRegionRequest(_CamelModel):
    position: Optional[PositionBody] = None
    region: Optional[RegionBody] = None


class PizzaBody(_CamelModel):
    name: str
    price_in_pence: int = Field(alias="priceInPence")


class CreditCardBody(_CamelModel):
    credit_card_number: str = Field("", alias="creditCardNumber")
    credit_card_expiry: str = Field("", alias="creditCardExpiry")
    cvv: str = ""


class OrderRequest(_CamelModel):
    order_no: str = Field("", alias="orderNo")
    order_date: Optional[date] = Field(None, alias="orderDate")
    order_status: Optional[str] = Field(None, alias="orderStatus")
    order_validation_code: Optional[str] = Field(None, alias="orderValidationCode")
    price_total_in_pence: Optional[int] = Field(None, alias="priceTotalInPence")
    pizzas_in_order: Optional[List[PizzaBody]] = Field(None, alias="pizzasInOrder")
    credit_card_information: Optional[CreditCardBody] = Field(
        None, alias="creditCardInformation"
    )

    def missing_fields(self) -> List[str]:
        """Names of the fields an order cannot be validated without."""

        missing = []
        if self.order_date is None:
            missing.append("orderDate")
        if self.price_total_in_pence is None or self.price_total_in_pence <= 0:
            missing.append("priceTotalInPence")
        if self.credit_card_information is None:
            missing.append("creditCardInformation")
        return missing

    def to_order(self) -> Order:
        card = self.credit_card_information or CreditCardBody()
        return Order(
            order_no=self.order_no,
            order_date=self.order_date,
            price_total_in_pence=self.price_total_in_pence or 0,
            credit_card_information=CreditCardInformation(
                credit_card_number=card.credit_card_number,
                credit_card_expiry=card.credit_card_expiry,
                cvv=card.cvv,
            ),
            pizzas_in_order=[
                Pizza(name=pizza.name, price_in_pence=pizza.price_in_pence)
                for pizza in self.pizzas_in_order or []
            ],
        )
