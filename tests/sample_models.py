"""Model classes shared by the test modules."""
from collections import namedtuple
from dataclasses import dataclass, field
from typing import ClassVar, List, Optional

from objmap import mapping_field


@dataclass
class UserEntity:
    user_id: int = 0
    first_name: str = ""
    last_name: str = ""
    email_address: str = ""
    password: str = ""


@dataclass
class UserDTO:
    userId: Optional[int] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    email: Optional[str] = None


@dataclass
class PersonA:
    userId: int = 0
    fullName: str = ""
    age: int = 0


@dataclass
class PersonB:
    id: int = 0
    name: str = ""
    age: int = 0


@dataclass
class Contact:
    email: str
    phone: Optional[str] = None


@dataclass
class Customer:
    name: str
    contact_info: Contact


@dataclass
class Order:
    order_id: int
    customer: Customer
    line_items: List[dict] = field(default_factory=list)


@dataclass
class LineItemDTO:
    sku: str = ""
    qty: int = 0


@dataclass
class OrderDTO:
    id: Optional[int] = None
    customerEmail: Optional[str] = None
    items: List[LineItemDTO] = field(default_factory=list)


@dataclass
class DeclaredUserDTO:
    id: Optional[int] = mapping_field(source="user_id", default=None)
    email: Optional[str] = mapping_field(source="email_address", using=str.lower, default=None)
    status: Optional[str] = mapping_field(default_value="active", default=None)
    password: str = mapping_field(ignore=True, default="hidden")
    first_name: Optional[str] = None


@dataclass(frozen=True)
class FrozenPoint:
    x: int = 0
    y: int = 0


Point = namedtuple("Point", ["x", "y"])


class PlainAccount:
    """Non-dataclass with annotations and a constructor."""

    kind: ClassVar[str] = "account"
    owner: str
    balance: float

    def __init__(self, owner=None, balance=0.0):
        self.owner = owner
        self.balance = balance

    @property
    def display_name(self):
        return f"{self.owner} ({self.balance:.2f})"


class SlottedRecord:
    __slots__ = ("code", "label")

    def __init__(self, code=None, label=None):
        self.code = code
        self.label = label


@dataclass
class ProductRecord:
    getName: str = ""
    dob: str = ""
    qty: int = 0


@dataclass
class ProductView:
    name: str = ""
    date_of_birth: str = ""
    quantity: int = 0
