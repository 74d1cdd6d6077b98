"""
Core models for Steakz.
Provides BaseModel with timestamp fields and BranchOwnedModel for
records that belong to exactly one branch.
"""
from django.core.exceptions import ValidationError
from django.db import models


class BaseModel(models.Model):
    """
    Abstract base model with integer primary key and timestamps.

    All models in Steakz should inherit from this base model to ensure
    consistent behavior across the platform.
    """
    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="Timestamp when the record was created"
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="Timestamp when the record was last updated"
    )

    class Meta:
        abstract = True
        ordering = ['-created_at']


class BranchScopedQuerySet(models.QuerySet):
    """QuerySet helpers shared by every branch-owned model."""

    def for_branch(self, branch_id):
        """Filter records owned by a single branch."""
        return self.filter(branch_id=branch_id)

    def for_user(self, user):
        """Filter records created by a specific user."""
        return self.filter(user=user)


class BranchOwnedModel(BaseModel):
    """
    Abstract model for records owned by exactly one branch.

    The owning branch is the only multi-tenancy key in the system and is
    immutable once the record exists.
    """
    branch = models.ForeignKey(
        'branches.Branch',
        on_delete=models.PROTECT,
        related_name='+',
        db_index=True,
        help_text="Branch that owns this record"
    )

    objects = BranchScopedQuerySet.as_manager()

    class Meta:
        abstract = True
        ordering = ['-created_at']

    def save(self, *args, **kwargs):
        if self.pk is not None and not self._state.adding:
            stored = type(self).objects.filter(pk=self.pk).values_list('branch_id', flat=True).first()
            if stored is not None and stored != self.branch_id:
                raise ValidationError({'branch': 'Owning branch cannot be changed after creation.'})
        super().save(*args, **kwargs)
