"""
Branch serializers.
"""
import re
from rest_framework import serializers
from apps.branches.models import Branch

TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')


class BranchSummarySerializer(serializers.ModelSerializer):
    """Compact branch reference embedded in other payloads."""

    class Meta:
        model = Branch
        fields = ['id', 'name', 'city', 'country']
        read_only_fields = fields


class BranchSerializer(serializers.ModelSerializer):
    """Branch as shown in the branch selector."""

    class Meta:
        model = Branch
        fields = [
            'id', 'name', 'location', 'country', 'city', 'address',
            'postal_code', 'phone', 'email', 'timezone', 'latitude',
            'longitude', 'opening_time', 'closing_time',
        ]
        read_only_fields = fields


class BranchSettingsSerializer(serializers.ModelSerializer):
    """
    Editable branch settings.

    Name and location identify the branch and are not editable here.
    """

    class Meta:
        model = Branch
        fields = BranchSerializer.Meta.fields + ['holidays', 'updated_at']
        read_only_fields = ['id', 'name', 'location', 'updated_at']

    def _validate_time(self, value):
        if value and not TIME_PATTERN.match(value):
            raise serializers.ValidationError("Use 24-hour HH:MM format.")
        return value

    def validate_opening_time(self, value):
        return self._validate_time(value)

    def validate_closing_time(self, value):
        return self._validate_time(value)

    def validate_latitude(self, value):
        if value is not None and not -90 <= value <= 90:
            raise serializers.ValidationError("Latitude must be between -90 and 90.")
        return value

    def validate_longitude(self, value):
        if value is not None and not -180 <= value <= 180:
            raise serializers.ValidationError("Longitude must be between -180 and 180.")
        return value

    def validate_holidays(self, value):
        if not isinstance(value, list):
            raise serializers.ValidationError("Holidays must be a list.")
        return value


class BranchAnalyticsSerializer(serializers.Serializer):
    """Shape of the branch analytics payload (documentation only)."""

    branch_id = serializers.IntegerField()
    sales = serializers.DictField()
    reservations = serializers.DictField()
    feedback = serializers.DictField()
    inventory = serializers.DictField()
