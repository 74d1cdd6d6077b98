"""
Feedback services: submission and moderation.
"""
import logging
from apps.feedback.models import Feedback
from apps.rbac.models import AuditLog

logger = logging.getLogger(__name__)


class FeedbackService:

    @classmethod
    def submit(cls, user, branch_id, rating, comment) -> Feedback:
        feedback = Feedback.objects.create(
            user=user,
            branch_id=branch_id,
            rating=rating,
            comment=comment,
        )
        logger.info(
            "Feedback submitted",
            extra={'feedback_id': feedback.id, 'branch_id': branch_id, 'rating': rating}
        )
        return feedback

    @classmethod
    def reply(cls, feedback: Feedback, text, user=None, request=None) -> Feedback:
        feedback.reply = text
        feedback.save(update_fields=['reply', 'updated_at'])
        cls._audit('feedback_replied', feedback, user, request)
        return feedback

    @classmethod
    def approve(cls, feedback: Feedback, user=None, request=None) -> Feedback:
        feedback.approved = True
        feedback.save(update_fields=['approved', 'updated_at'])
        cls._audit('feedback_approved', feedback, user, request)
        return feedback

    @classmethod
    def delete(cls, feedback: Feedback, user=None, request=None):
        cls._audit('feedback_deleted', feedback, user, request, metadata={'rating': feedback.rating})
        feedback.delete()

    @staticmethod
    def _audit(action, feedback, user, request, metadata=None):
        AuditLog.log_action(
            action=action,
            user=user,
            branch_id=feedback.branch_id,
            target_type='Feedback',
            target_id=feedback.id,
            metadata=metadata,
            request=request,
        )
