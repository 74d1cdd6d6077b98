"""
Branch services: sample seeding and analytics.
"""
import logging
from decimal import Decimal
from django.db import transaction
from django.db.models import Avg, Count, F, Sum

from apps.branches.models import Branch
from apps.feedback.models import Feedback
from apps.inventory.models import InventoryItem
from apps.orders.models import Order
from apps.reservations.models import Reservation
from apps.core.exceptions import ResourceNotFound
from apps.rbac.branch_scope import parse_branch_id

logger = logging.getLogger(__name__)


SAMPLE_BRANCHES = [
    {
        'name': 'Steakz London', 'city': 'London', 'country': 'UK',
        'timezone': 'Europe/London', 'address': '10 Downing St', 'postal_code': 'SW1A 2AA',
        'phone': '+44 20 7946 0000', 'email': 'london@steakz.example',
        'latitude': 51.5034, 'longitude': -0.1276,
        'opening_time': '09:00', 'closing_time': '22:00',
    },
    {
        'name': 'Steakz Paris', 'city': 'Paris', 'country': 'France',
        'timezone': 'Europe/Paris', 'address': '5 Avenue Anatole France', 'postal_code': '75007',
        'phone': '+33 1 2345 6789', 'email': 'paris@steakz.example',
        'latitude': 48.8584, 'longitude': 2.2945,
        'opening_time': '09:00', 'closing_time': '22:00',
    },
    {
        'name': 'Steakz Madrid', 'city': 'Madrid', 'country': 'Spain',
        'timezone': 'Europe/Madrid', 'address': 'Plaza Mayor', 'postal_code': '28012',
        'phone': '+34 91 123 4567', 'email': 'madrid@steakz.example',
        'latitude': 40.4168, 'longitude': -3.7038,
        'opening_time': '09:00', 'closing_time': '22:00',
    },
]


class BranchService:
    """
    Operations on branches that are not plain CRUD.
    """

    @classmethod
    def get_branch(cls, branch_id) -> Branch:
        parsed = parse_branch_id(branch_id)
        branch = Branch.objects.filter(pk=parsed).first() if parsed else None
        if branch is None:
            raise ResourceNotFound('Branch not found.')
        return branch

    @classmethod
    @transaction.atomic
    def seed_sample_branches(cls):
        """
        Create the sample branches that do not exist yet.

        Idempotent: a branch with the same name and city is skipped.

        Returns:
            List of {'name', 'status', 'id'} with status 'created' or 'skipped'
        """
        summary = []
        for sample in SAMPLE_BRANCHES:
            existing = Branch.objects.by_name(sample['name'], city=sample['city'])
            if existing:
                summary.append({'name': sample['name'], 'status': 'skipped', 'id': existing.id})
                continue
            branch = Branch.objects.create(location=sample['city'], **sample)
            summary.append({'name': sample['name'], 'status': 'created', 'id': branch.id})

        logger.info("Sample branches seeded", extra={'summary': summary})
        return summary

    @classmethod
    def get_analytics(cls, branch: Branch):
        """
        Headline numbers for one branch.

        Feedback figures only count approved entries. An inventory record is
        low on stock when its quantity is below its minimum.
        """
        orders = Order.objects.for_branch(branch.id).aggregate(count=Count('id'), total=Sum('total'))
        feedback = Feedback.objects.for_branch(branch.id).filter(approved=True).aggregate(
            count=Count('id'), average_rating=Avg('rating')
        )
        low_stock_count = InventoryItem.objects.for_branch(branch.id).filter(
            quantity__lt=F('min_quantity')
        ).count()

        return {
            'branch_id': branch.id,
            'sales': {
                'count': orders['count'],
                'total': orders['total'] or Decimal('0.00'),
            },
            'reservations': {
                'count': Reservation.objects.for_branch(branch.id).count(),
            },
            'feedback': {
                'count': feedback['count'],
                'average_rating': round(feedback['average_rating'] or 0, 2),
            },
            'inventory': {
                'low_stock_count': low_stock_count,
            },
        }
