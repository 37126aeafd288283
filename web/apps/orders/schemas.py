"""Pydantic schemas for the order forms.

This module exposes lightweight validation schemas for the HTML form
payloads posted to the order pages. Type and presence checks live here;
range and business checks (known size, positive quantity) are left to the
domain rules so every caller gets the same errors.
"""

from typing import Annotated, ClassVar

from pydantic import BaseModel, StringConstraints, ValidationError

from .domain import InvalidInput, InvalidQuantity

OrderCode = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class FormDTO(BaseModel):
    """Base schema for form payloads.

    Subclasses map a failing field to the domain error (and message) that
    the view reports as a 400.
    """

    field_errors: ClassVar[dict[str, tuple[type[InvalidInput], str]]] = {}

    @classmethod
    def from_form(cls, data):
        """Validate a form payload (QueryDict or dict).

        Only the last value of repeated keys is kept, as with
        ``request.POST[key]``.

        Raises:
            InvalidInput: Or the subclass registered for the first failing
                field.
        """
        try:
            return cls.model_validate(dict(data.items()))
        except ValidationError as exc:
            loc = exc.errors()[0]["loc"]
            name = str(loc[0]) if loc else ""
            error_cls, message = cls.field_errors.get(name, (InvalidInput, f"Invalid {name or 'input'}"))
            raise error_cls(message) from exc


class PlaceOrderDTO(FormDTO):
    """Schema for placing an order.

    Attributes:
        contact: Customer identifier, stored as given.
        size: Size label; checked against the price table by the domain.
        qty: Integer quantity; positivity is checked by the domain.
    """

    contact: str = ""
    size: str = ""
    qty: int

    field_errors = {
        "qty": (InvalidQuantity, "Quantity must be a number"),
        "contact": (InvalidInput, "Invalid contact"),
        "size": (InvalidInput, "Invalid size"),
    }


class CustomerQueryDTO(FormDTO):
    contact: str = ""


class OrderCodeDTO(FormDTO):
    """Schema for forms that target one order by its code.

    Surrounding whitespace is stripped; a blank code is rejected.
    """

    orderid: OrderCode

    field_errors = {"orderid": (InvalidInput, "Order ID required")}
