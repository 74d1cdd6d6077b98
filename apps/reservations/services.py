"""
Reservation services.
"""
import logging
from apps.rbac.models import AuditLog
from apps.reservations.models import Reservation

logger = logging.getLogger(__name__)


class ReservationService:

    @classmethod
    def create_reservation(cls, user, branch_id, date, time, guests, notes='') -> Reservation:
        reservation = Reservation.objects.create(
            user=user,
            branch_id=branch_id,
            date=date,
            time=time,
            guests=guests,
            notes=notes,
        )
        logger.info(
            "Reservation created",
            extra={'reservation_id': reservation.id, 'branch_id': branch_id, 'guests': guests}
        )
        return reservation

    @classmethod
    def update_status(cls, reservation: Reservation, status, user=None, request=None) -> Reservation:
        previous = reservation.status
        reservation.status = status
        reservation.save(update_fields=['status', 'updated_at'])

        AuditLog.log_action(
            action='reservation_status_changed',
            user=user,
            branch_id=reservation.branch_id,
            target_type='Reservation',
            target_id=reservation.id,
            diff={'before': {'status': previous}, 'after': {'status': status}},
            request=request,
        )
        return reservation
