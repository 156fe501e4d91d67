"""Health Point pharmacy point-of-sale core: inventory, ids, orders, receipts."""

from .category_codes import CategoryCodes
from .db import DB
from .errors import (AuthenticationError, NotFoundError, OrderPlacementError,
                     PharmacyError, ValidationError)
from .ids import IdGenerator
from .inventory import Inventory
from .orders import Cart, Checkout, place_order

__version__ = '1.0.0'
