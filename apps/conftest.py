import pytest
from datetime import date
from decimal import Decimal

from django.conf import settings
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User, Role
from apps.pricing.models import PriceEntry, PriceSetting


def client_for(user):
    """Return an API client authenticated as ``user`` using JWT."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


# =============================================================================
# Users & clients
# =============================================================================

@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    """Create and return an admin-role user."""
    return User.objects.create_user(username='admin', password='AdminPass123', role=Role.ADMIN)


@pytest.fixture
def other_admin(db):
    """Create and return a second admin-role user."""
    return User.objects.create_user(username='clerk', password='ClerkPass123', role=Role.ADMIN)


@pytest.fixture
def root_user(db):
    """Create and return a root-role user without the super-root capability."""
    return User.objects.create_user(username='root', password='RootPass123', role=Role.ROOT)


@pytest.fixture
def other_root(db):
    """Create and return a second plain root user."""
    return User.objects.create_user(username='auditor', password='AuditPass123', role=Role.ROOT)


@pytest.fixture
def super_root_user(db):
    """Create and return the super root."""
    return User.objects.create_user(
        username=settings.SUPER_ROOT_USERNAME,
        password='SuperPass123',
        role=Role.ROOT,
    )


@pytest.fixture
def admin_client(admin_user):
    """Return an API client authenticated as the admin user."""
    return client_for(admin_user)


@pytest.fixture
def root_client(root_user):
    """Return an API client authenticated as the root user."""
    return client_for(root_user)


@pytest.fixture
def super_root_client(super_root_user):
    """Return an API client authenticated as the super root."""
    return client_for(super_root_user)


# =============================================================================
# Prices
# =============================================================================

@pytest.fixture
def price_table(db):
    """Two entries: fresh 1000 from 2024-01-01, fresh 1200 from 2024-06-01."""
    return [
        PriceEntry.objects.create(
            effective_date=date(2024, 1, 1),
            fresh_price=Decimal('1000'),
            burnt_price=Decimal('800'),
            long_top_price=Decimal('900'),
        ),
        PriceEntry.objects.create(
            effective_date=date(2024, 6, 1),
            fresh_price=Decimal('1200'),
            burnt_price=Decimal('950'),
            long_top_price=Decimal('1050'),
        ),
    ]


@pytest.fixture
def legacy_setting(db):
    """Legacy single-row setting with its own flat prices."""
    return PriceSetting.objects.create(
        fresh_price=Decimal('1111'),
        burnt_price=Decimal('999'),
        long_top_price=Decimal('1055'),
        quotas=['Q-01', 'Q-02'],
    )
