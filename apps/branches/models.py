"""
Branch model.

A branch is one restaurant location. Every order, reservation, feedback
entry, menu item and inventory record belongs to exactly one branch.
"""
from django.db import models
from apps.core.models import BaseModel


class BranchManager(models.Manager):
    """Manager for branch queries."""

    def by_name(self, name, city=None):
        qs = self.filter(name=name)
        if city is not None:
            qs = qs.filter(city=city)
        return qs.first()


class Branch(BaseModel):
    """
    A restaurant location with its contact details and opening hours.
    """

    name = models.CharField(
        max_length=255,
        db_index=True,
        help_text="Display name, e.g. 'Steakz London'"
    )
    location = models.CharField(
        max_length=255,
        help_text="Short location label"
    )

    # Address
    country = models.CharField(max_length=100, blank=True)
    city = models.CharField(max_length=100, blank=True)
    address = models.CharField(max_length=255, blank=True)
    postal_code = models.CharField(max_length=20, blank=True)

    # Contact
    phone = models.CharField(max_length=50, blank=True)
    email = models.EmailField(blank=True)

    # Operations
    timezone = models.CharField(
        max_length=64,
        blank=True,
        help_text="IANA timezone, e.g. 'Europe/London'"
    )
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    opening_time = models.CharField(
        max_length=5,
        blank=True,
        help_text="Opening time as HH:MM"
    )
    closing_time = models.CharField(
        max_length=5,
        blank=True,
        help_text="Closing time as HH:MM"
    )
    holidays = models.JSONField(
        default=list,
        blank=True,
        help_text="Dates the branch is closed"
    )

    objects = BranchManager()

    class Meta:
        db_table = 'branches'
        ordering = ['name']

    def __str__(self):
        return self.name
