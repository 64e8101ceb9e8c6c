import pytest

from apps.farmers.models import Farmer


@pytest.fixture
def farmer(db):
    """A farmer with one known plate."""
    return Farmer.objects.create(name='Somchai Jaidee', license_plates=['1กข-1234'])


@pytest.fixture
def lookalike_farmers(db):
    """Farmers whose names differ by a typo, plus an unrelated one."""
    return [
        Farmer.objects.create(name='Somchai Jaidee'),
        Farmer.objects.create(name='Somchai Jaide'),
        Farmer.objects.create(name='Wichai Boonmee'),
    ]
