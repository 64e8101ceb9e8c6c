from django.db import models
import uuid


class Farmer(models.Model):
    """
    Cane grower and the license plates seen on their bills.

    Bills link to a farmer only by ``owner_name == name``; there is no
    foreign key.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, db_index=True)
    license_plates = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'farmers'
        ordering = ['name']

    def __str__(self):
        return self.name
