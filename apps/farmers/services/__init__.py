"""Farmers app services layer."""

from .exceptions import (
    FarmerServiceError,
    FarmerNotFoundError,
    InvalidFarmerDataError,
)
from .farmer_sync import sync_farmer_plate
from .farmer_management import (
    clean_plates,
    list_farmers,
    get_farmer,
    create_farmer,
    update_farmer,
    delete_farmer,
)
from .farmer_similarity import (
    normalize_name,
    find_similar_farmers,
    find_duplicate_farmers,
)

__all__ = [
    # Exceptions
    'FarmerServiceError',
    'FarmerNotFoundError',
    'InvalidFarmerDataError',
    # Sync
    'sync_farmer_plate',
    # Management
    'clean_plates',
    'list_farmers',
    'get_farmer',
    'create_farmer',
    'update_farmer',
    'delete_farmer',
    # Similarity
    'normalize_name',
    'find_similar_farmers',
    'find_duplicate_farmers',
]
