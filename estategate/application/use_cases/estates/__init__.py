"""Use cases for estates."""

from .manage_estates import get_estate, list_estates, update_estate
from .provision_estate import EstateData, ProvisionResult, provision_estate

__all__ = [
    "EstateData",
    "ProvisionResult",
    "get_estate",
    "list_estates",
    "provision_estate",
    "update_estate",
]
