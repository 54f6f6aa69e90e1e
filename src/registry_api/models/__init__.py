"""ORM model registry — import all models so Alembic autogenerate discovers them."""

from registry_api.models.household import Household
from registry_api.models.resident import Resident
from registry_api.models.user_profile import UserProfile

__all__ = [
    "Household",
    "Resident",
    "UserProfile",
]
