from quickcreate.core.models.exercise import Exercise
from quickcreate.core.models.account import Account, Subaccount
from quickcreate.core.models.product import Family, Manufacturer, Product, Tax

__all__ = [
    "Account",
    "Exercise",
    "Family",
    "Manufacturer",
    "Product",
    "Subaccount",
    "Tax",
]
