"""
Reservation serializers.
"""
from rest_framework import serializers
from apps.branches.serializers import TIME_PATTERN
from apps.reservations.models import Reservation


class ReservationSerializer(serializers.ModelSerializer):
    branch_id = serializers.IntegerField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    user_email = serializers.CharField(source='user.email', read_only=True)

    class Meta:
        model = Reservation
        fields = [
            'id', 'branch_id', 'user_id', 'user_email', 'date', 'time',
            'guests', 'status', 'notes', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class ReservationCreateSerializer(serializers.Serializer):
    date = serializers.DateField()
    time = serializers.CharField(max_length=5)
    guests = serializers.IntegerField(min_value=1, max_value=50)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    branch_id = serializers.IntegerField(required=False, allow_null=True)

    def validate_time(self, value):
        if not TIME_PATTERN.match(value):
            raise serializers.ValidationError("Use 24-hour HH:MM format.")
        return value


class ReservationStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Reservation.Status.choices)
