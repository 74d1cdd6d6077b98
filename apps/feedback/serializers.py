"""
Feedback serializers.
"""
from rest_framework import serializers
from apps.feedback.models import MAX_RATING, MIN_RATING, Feedback


class FeedbackSerializer(serializers.ModelSerializer):
    branch_id = serializers.IntegerField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    user_email = serializers.CharField(source='user.email', read_only=True)

    class Meta:
        model = Feedback
        fields = [
            'id', 'branch_id', 'user_id', 'user_email', 'rating', 'comment',
            'reply', 'approved', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class FeedbackCreateSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING)
    comment = serializers.CharField()
    branch_id = serializers.IntegerField(required=False, allow_null=True)

    def validate_comment(self, value):
        if not value.strip():
            raise serializers.ValidationError("Comment is required.")
        return value.strip()


class FeedbackReplySerializer(serializers.Serializer):
    reply = serializers.CharField()

    def validate_reply(self, value):
        if not value.strip():
            raise serializers.ValidationError("Reply text is required.")
        return value.strip()
