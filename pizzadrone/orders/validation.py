"""Mini README: Order validation rules for pizza deliveries.

Structure:
    * Pizza / Restaurant / CreditCardInformation / Order - order data.
    * OrderStatus / OrderValidationCode - outcome enums shared with the API.
    * OrderValidationResult - status plus the first failing rule.
    * OrderValidator - applies the rule chain against a restaurant list.

Rules are checked in a fixed order and the first failure wins, so clients
always see a single, stable validation code for a given order. Basket
shape, totals and payment come first; opening days and the menu checks
(unknown pizzas, wrong unit prices) run last.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from ..logging_utils import get_logger
from ..route_planning import LngLat

LOGGER = get_logger(__name__)

_CARD_NUMBER_PATTERN = re.compile(r"\d{16}")
_EXPIRY_PATTERN = re.compile(r"(\d{2})/(\d{2})")
_CVV_PATTERN = re.compile(r"\d{3}")
_WEEKDAYS = (
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "SUNDAY",
)


class OrderStatus(str, Enum):
    VALID = "VALID"
    INVALID = "INVALID"
    UNDEFINED = "UNDEFINED"


class OrderValidationCode(str, Enum):
    NO_ERROR = "NO_ERROR"
    UNDEFINED = "UNDEFINED"
    EMPTY_ORDER = "EMPTY_ORDER"
    MAX_PIZZA_COUNT_EXCEEDED = "MAX_PIZZA_COUNT_EXCEEDED"
    PIZZA_NOT_DEFINED = "PIZZA_NOT_DEFINED"
    PIZZA_FROM_MULTIPLE_RESTAURANTS = "PIZZA_FROM_MULTIPLE_RESTAURANTS"
    PRICE_FOR_PIZZA_INVALID = "PRICE_FOR_PIZZA_INVALID"
    TOTAL_INCORRECT = "TOTAL_INCORRECT"
    CARD_NUMBER_INVALID = "CARD_NUMBER_INVALID"
    EXPIRY_DATE_INVALID = "EXPIRY_DATE_INVALID"
    CVV_INVALID = "CVV_INVALID"
    RESTAURANT_CLOSED = "RESTAURANT_CLOSED"


@dataclass(frozen=True, slots=True)
class Pizza:
    """A menu item; names are unique across all restaurants."""

    name: str
    price_in_pence: int


@dataclass(frozen=True, slots=True)
class Restaurant:
    """A restaurant with its pickup location, opening days and menu."""

    name: str
    location: LngLat
    opening_days: Tuple[str, ...] = ()
    menu: Tuple[Pizza, ...] = ()

    def serves(self, pizza_name: str) -> bool:
        return any(item.name == pizza_name for item in self.menu)

    def menu_price(self, pizza_name: str) -> Optional[int]:
        for item in self.menu:
            if item.name == pizza_name:
                return item.price_in_pence
        return None

    def is_open_on(self, day: date) -> bool:
        """Opening days are upper-case weekday names such as ``MONDAY``."""

        return _WEEKDAYS[day.weekday()] in {entry.upper() for entry in self.opening_days}


@dataclass(frozen=True, slots=True)
class CreditCardInformation:
    credit_card_number: str
    credit_card_expiry: str
    cvv: str


@dataclass(slots=True)
class Order:
    """An order as submitted by a client."""

    order_no: str
    order_date: date
    price_total_in_pence: int
    credit_card_information: CreditCardInformation
    pizzas_in_order: List[Pizza] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class OrderValidationResult:
    order_status: OrderStatus
    order_validation_code: OrderValidationCode

    @property
    def is_valid(self) -> bool:
        return self.order_status is OrderStatus.VALID

    def as_dict(self) -> dict:
        return {
            "orderStatus": self.order_status.value,
            "orderValidationCode": self.order_validation_code.value,
        }


def is_valid_expiry(expiry: str, order_date: date) -> bool:
    """Return True for an ``MM/YY`` expiry that has not passed on ``order_date``.

    A card stays valid until the end of its expiry month.
    """

    match = _EXPIRY_PATTERN.fullmatch(expiry or "")
    if not match:
        return False
    month = int(match.group(1))
    year = 2000 + int(match.group(2))
    if not 1 <= month <= 12:
        return False
    if month == 12:
        first_invalid_day = date(year + 1, 1, 1)
    else:
        first_invalid_day = date(year, month + 1, 1)
    return order_date < first_invalid_day


class OrderValidator:
    """Validate orders against a snapshot of the restaurant list."""

    def __init__(
        self,
        restaurants: Iterable[Restaurant],
        *,
        charge_in_pence: int = 100,
        max_pizzas: int = 4,
    ) -> None:
        self.restaurants: Tuple[Restaurant, ...] = tuple(restaurants)
        self.charge_in_pence = charge_in_pence
        self.max_pizzas = max_pizzas

    def find_restaurant(self, pizza_name: str) -> Optional[Restaurant]:
        """Return the restaurant whose menu lists ``pizza_name``."""

        for restaurant in self.restaurants:
            if restaurant.serves(pizza_name):
                return restaurant
        return None

    def validate(self, order: Order) -> OrderValidationResult:
        """Run every rule in order and report the first failure."""

        code = self._first_failure(order)
        if code is OrderValidationCode.NO_ERROR:
            result = OrderValidationResult(OrderStatus.VALID, code)
        else:
            result = OrderValidationResult(OrderStatus.INVALID, code)
        LOGGER.debug(
            "Order %s validated as %s (%s)",
            order.order_no,
            result.order_status.value,
            result.order_validation_code.value,
        )
        return result

    def _first_failure(self, order: Order) -> OrderValidationCode:
        pizzas: Sequence[Pizza] = order.pizzas_in_order or []
        if not pizzas:
            return OrderValidationCode.EMPTY_ORDER
        if len(pizzas) > self.max_pizzas:
            return OrderValidationCode.MAX_PIZZA_COUNT_EXCEEDED

        # Pizzas missing from every menu are reported by the menu checks at the end.
        known = [
            restaurant
            for restaurant in (self.find_restaurant(pizza.name) for pizza in pizzas)
            if restaurant is not None
        ]
        if len({restaurant.name for restaurant in known}) > 1:
            return OrderValidationCode.PIZZA_FROM_MULTIPLE_RESTAURANTS

        expected_total = sum(pizza.price_in_pence for pizza in pizzas) + self.charge_in_pence
        if order.price_total_in_pence != expected_total:
            return OrderValidationCode.TOTAL_INCORRECT

        card = order.credit_card_information
        if not _CARD_NUMBER_PATTERN.fullmatch(card.credit_card_number or ""):
            return OrderValidationCode.CARD_NUMBER_INVALID
        if not is_valid_expiry(card.credit_card_expiry, order.order_date):
            return OrderValidationCode.EXPIRY_DATE_INVALID
        if not _CVV_PATTERN.fullmatch(card.cvv or ""):
            return OrderValidationCode.CVV_INVALID

        restaurant = known[0] if known else None
        if restaurant is not None and not restaurant.is_open_on(order.order_date):
            return OrderValidationCode.RESTAURANT_CLOSED

        for pizza in pizzas:
            if restaurant is None or not restaurant.serves(pizza.name):
                return OrderValidationCode.PIZZA_NOT_DEFINED
            if restaurant.menu_price(pizza.name) != pizza.price_in_pence:
                return OrderValidationCode.PRICE_FOR_PIZZA_INVALID
        return OrderValidationCode.NO_ERROR
