"""
Table reservation model.
"""
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from apps.core.models import BranchOwnedModel, BranchScopedQuerySet


class ReservationQuerySet(BranchScopedQuerySet):

    def upcoming(self, today):
        return self.filter(date__gte=today).exclude(status=Reservation.Status.CANCELLED)


class Reservation(BranchOwnedModel):
    """
    A table booking at a branch.
    """

    class Status(models.TextChoices):
        PENDING = 'PENDING', 'Pending'
        CONFIRMED = 'CONFIRMED', 'Confirmed'
        CANCELLED = 'CANCELLED', 'Cancelled'

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='reservations',
        help_text="User who made the booking"
    )
    date = models.DateField(db_index=True)
    time = models.CharField(max_length=5, help_text="Arrival time as HH:MM")
    guests = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    notes = models.TextField(blank=True)

    objects = ReservationQuerySet.as_manager()

    class Meta:
        db_table = 'reservations'
        ordering = ['date', 'time']
        indexes = [
            models.Index(fields=['branch', 'date'], name='reservations_branch_date_idx'),
            models.Index(fields=['branch', 'status'], name='reservations_branch_stat_idx'),
        ]

    def __str__(self):
        return f"Reservation {self.id} - {self.date} {self.time} ({self.guests})"
