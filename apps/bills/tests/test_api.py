import pytest
from decimal import Decimal
from io import BytesIO
from uuid import uuid4

from django.urls import reverse
from openpyxl import load_workbook
from rest_framework import status

from apps.bills.models import Bill


def bill_payload(**overrides):
    data = {
        'bill_number': 'B-1',
        'owner_name': 'Somchai Jaidee',
        'quota_number': 'Q-01',
        'license_plate': '1กข-1234',
        'date': '2024-03-15',
        'sugarcane_type': 1,
        'weight': '10',
        'fuel_cost': '50',
    }
    data.update(overrides)
    return data


# =============================================================================
# Create Tests
# =============================================================================

@pytest.mark.django_db
class TestCreateBill:
    """Tests for POST /api/bills/"""

    def test_anonymous_rejected(self, api_client, price_table):
        """Bills require authentication."""
        response = api_client.post(reverse('bills:bill-list'), bill_payload(), format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert Bill.objects.count() == 0

    def test_admin_creates(self, admin_client, price_table):
        """Admin records a bill priced from the table."""
        response = admin_client.post(reverse('bills:bill-list'), bill_payload(), format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert Decimal(response.data['price_per_unit']) == Decimal('1000')
        assert Decimal(response.data['total_amount']) == Decimal('10000')
        assert Decimal(response.data['net_amount']) == Decimal('9950')
        assert response.data['created_by'] == 'admin'

    def test_duplicate_conflict(self, admin_client, price_table):
        """A second B-1 returns 409 and nothing new is stored."""
        admin_client.post(reverse('bills:bill-list'), bill_payload(), format='json')
        response = admin_client.post(
            reverse('bills:bill-list'),
            bill_payload(owner_name='Other'),
            format='json',
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert 'error' in response.data
        assert Bill.objects.filter(bill_number='B-1').count() == 1

    def test_manual_price(self, admin_client, price_table):
        """Manual price is used verbatim."""
        response = admin_client.post(
            reverse('bills:bill-list'),
            bill_payload(manual_price='1100.50'),
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert Decimal(response.data['price_per_unit']) == Decimal('1100.50')

    def test_invalid_type(self, admin_client):
        """Cane type outside 1..3 is a validation error."""
        response = admin_client.post(
            reverse('bills:bill-list'),
            bill_payload(sugarcane_type=4),
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'sugarcane_type' in response.data
        assert Bill.objects.count() == 0

    def test_missing_fields(self, admin_client):
        """Required fields are reported."""
        response = admin_client.post(reverse('bills:bill-list'), {'bill_number': 'B-9'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        for field in ('owner_name', 'date', 'sugarcane_type', 'weight'):
            assert field in response.data

    def test_negative_weight(self, admin_client):
        """Negative weight is rejected."""
        response = admin_client.post(
            reverse('bills:bill-list'),
            bill_payload(weight='-1'),
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# List / Retrieve Tests
# =============================================================================

@pytest.mark.django_db
class TestListBills:
    """Tests for GET /api/bills/"""

    def test_admin_lists(self, admin_client, sample_bills):
        """Listing is paginated and newest first."""
        response = admin_client.get(reverse('bills:bill-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 3
        assert [row['bill_number'] for row in response.data['results']] == ['X-3', 'B-2', 'B-1']

    def test_filters(self, admin_client, sample_bills):
        """Search, date range and type filters combine."""
        response = admin_client.get(
            reverse('bills:bill-list'),
            {'search': 'Q-0', 'date_from': '2024-02-01', 'sugarcane_type': 2},
        )

        assert [row['bill_number'] for row in response.data['results']] == ['B-2']

    def test_bad_date_range(self, admin_client):
        """date_from after date_to is rejected."""
        response = admin_client.get(
            reverse('bills:bill-list'),
            {'date_from': '2024-05-01', 'date_to': '2024-01-01'},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_retrieve(self, admin_client, bill):
        """Admin can read one bill."""
        response = admin_client.get(reverse('bills:bill-detail', kwargs={'pk': bill.id}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['bill_number'] == 'B-100'
        assert response.data['sugarcane_type_display'] == 'Fresh'

    def test_retrieve_unknown(self, admin_client):
        """Unknown bill returns 404."""
        response = admin_client.get(reverse('bills:bill-detail', kwargs={'pk': uuid4()}))

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Update / Delete Tests
# =============================================================================

@pytest.mark.django_db
class TestUpdateBill:
    """Tests for PUT/PATCH /api/bills/{id}/"""

    def test_admin_forbidden(self, admin_client, bill):
        """Admin cannot edit a bill."""
        response = admin_client.patch(
            reverse('bills:bill-detail', kwargs={'pk': bill.id}),
            {'weight': '20'},
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['detail'] == 'Forbidden'
        bill.refresh_from_db()
        assert bill.weight == Decimal('10')

    def test_root_patches(self, root_client, bill, price_table):
        """Root can edit; totals are recomputed."""
        response = root_client.patch(
            reverse('bills:bill-detail', kwargs={'pk': bill.id}),
            {'weight': '20'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['total_amount']) == Decimal('20000')

    def test_root_puts_new_date(self, root_client, bill, price_table):
        """Full update moving the date re-resolves the price."""
        response = root_client.put(
            reverse('bills:bill-detail', kwargs={'pk': bill.id}),
            bill_payload(bill_number='B-100', date='2024-07-01'),
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['price_per_unit']) == Decimal('1200')

    def test_rename_conflict(self, root_client, bill, sample_bills):
        """Renaming to an existing number returns 409."""
        response = root_client.patch(
            reverse('bills:bill-detail', kwargs={'pk': bill.id}),
            {'bill_number': 'B-1'},
            format='json',
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_update_unknown(self, root_client):
        """Unknown bill returns 404."""
        response = root_client.patch(
            reverse('bills:bill-detail', kwargs={'pk': uuid4()}),
            {'weight': '1'},
            format='json',
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestDeleteBill:
    """Tests for DELETE /api/bills/{id}/"""

    def test_admin_forbidden(self, admin_client, bill):
        """Admin cannot delete a bill."""
        response = admin_client.delete(reverse('bills:bill-detail', kwargs={'pk': bill.id}))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Bill.objects.count() == 1

    def test_root_deletes(self, root_client, bill):
        """Root can delete a bill."""
        response = root_client.delete(reverse('bills:bill-detail', kwargs={'pk': bill.id}))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert Bill.objects.count() == 0

    def test_delete_unknown(self, root_client):
        """Unknown bill returns 404."""
        response = root_client.delete(reverse('bills:bill-detail', kwargs={'pk': uuid4()}))

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Duplicate Check & Export Tests
# =============================================================================

@pytest.mark.django_db
class TestCheckDuplicate:
    """Tests for GET /api/bills/check-duplicate/{bill_number}/"""

    def test_existing(self, admin_client, bill):
        """Existing number reports exists=true."""
        url = reverse('bills:bill-check-duplicate', kwargs={'bill_number': 'B-100'})
        response = admin_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'exists': True}

    def test_free(self, admin_client, bill):
        """Unused number reports exists=false."""
        url = reverse('bills:bill-check-duplicate', kwargs={'bill_number': 'B-999'})
        response = admin_client.get(url)

        assert response.data == {'exists': False}

    def test_surrounding_whitespace_ignored(self, admin_client, bill):
        """The number is trimmed the same way bill creation trims it."""
        url = reverse('bills:bill-check-duplicate', kwargs={'bill_number': ' B-100 '})
        response = admin_client.get(url)

        assert response.data == {'exists': True}


@pytest.mark.django_db
class TestExport:
    """Tests for GET /api/bills/export/"""

    def test_admin_downloads_filtered(self, admin_client, sample_bills):
        """The export honours the listing filters."""
        response = admin_client.get(reverse('bills:bill-export'), {'sugarcane_type': 1})

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'].startswith('application/vnd.openxmlformats')
        assert 'attachment' in response['Content-Disposition']

        sheet = load_workbook(BytesIO(response.content)).active
        rows = list(sheet.iter_rows(values_only=True))
        assert len(rows) == 2
        assert rows[1][1] == 'B-1'

    def test_anonymous_rejected(self, api_client):
        """Export requires authentication."""
        response = api_client.get(reverse('bills:bill-export'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
