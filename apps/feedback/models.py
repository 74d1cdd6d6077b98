"""
Guest feedback model.
"""
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from apps.core.models import BranchOwnedModel, BranchScopedQuerySet

MIN_RATING = 1
MAX_RATING = 5


class FeedbackQuerySet(BranchScopedQuerySet):

    def approved(self):
        return self.filter(approved=True)

    def pending(self):
        return self.filter(approved=False)


class Feedback(BranchOwnedModel):
    """
    A rating and comment left by a guest about a branch, with an optional
    staff reply. Only approved feedback counts towards branch analytics.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='feedback',
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_RATING), MaxValueValidator(MAX_RATING)],
        help_text="Rating from 1 to 5"
    )
    comment = models.TextField()
    reply = models.TextField(blank=True)
    approved = models.BooleanField(default=False, db_index=True)

    objects = FeedbackQuerySet.as_manager()

    class Meta:
        db_table = 'feedback'
        ordering = ['-created_at']
        verbose_name_plural = 'feedback'
        indexes = [
            models.Index(fields=['branch', 'approved'], name='feedback_branch_approved_idx'),
        ]

    def __str__(self):
        return f"Feedback {self.id} ({self.rating}/5)"
