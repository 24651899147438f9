"""Fixed enumerations shared by the schemas, services and the database."""

from enum import Enum


class NameStatus(str, Enum):
    """Moderation status of a submitted name.

    ``ADMIN_APPROVED`` is stored as ``admin`` for compatibility with
    databases created by earlier versions of the site.
    """

    PENDING = "pending"
    APPROVED = "approved"
    ADMIN_APPROVED = "admin"
    REJECTED = "rejected"


# Statuses shown to the public when a listing does not ask for one.
PUBLIC_STATUSES = (NameStatus.APPROVED.value, NameStatus.ADMIN_APPROVED.value)

# Listing value that disables status filtering altogether.
ALL_STATUSES = "all"

MALE = "ஆண்கள்"
FEMALE = "பெண்கள்"
GENDERS = (MALE, FEMALE)

CATEGORY_UNIQUE = "தனித்துவமான"
CATEGORY_MODERN = "நவீன"
CATEGORY_PURE_TAMIL = "தூய தமிழ்"
CATEGORY_NATURE = "இயற்கை"
CATEGORIES = (CATEGORY_UNIQUE, CATEGORY_MODERN, CATEGORY_PURE_TAMIL, CATEGORY_NATURE)
