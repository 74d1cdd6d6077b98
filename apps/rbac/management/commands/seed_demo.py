"""
Management command to create a demo environment.

Creates:
- Two branches (Downtown and Uptown)
- One user per role, all homed in the first branch
- A small steak menu with stock levels, one of them already low

This is useful for testing, demos, and development.
"""
from decimal import Decimal
from django.core.management.base import BaseCommand
from django.db import transaction

from apps.branches.models import Branch
from apps.inventory.models import InventoryItem, MenuItem
from apps.rbac.models import User
from apps.rbac.roles import Role

DEMO_PASSWORD = 'password123'

DEMO_BRANCHES = [
    {'name': 'Steakz Downtown', 'location': 'Downtown', 'city': 'London', 'country': 'UK'},
    {'name': 'Steakz Uptown', 'location': 'Uptown', 'city': 'London', 'country': 'UK'},
]

DEMO_USERS = [
    {'email': 'admin@steakz.com', 'name': 'Alice Admin', 'role': Role.ADMIN},
    {'email': 'manager@steakz.com', 'name': 'Mark Manager', 'role': Role.MANAGER},
    {'email': 'chef@steakz.com', 'name': 'Carla Chef', 'role': Role.CHEF},
    {'email': 'staff@steakz.com', 'name': 'Sam Staff', 'role': Role.STAFF},
    {'email': 'customer@email.com', 'name': 'Cory Customer', 'role': Role.CUSTOMER},
]

DEMO_MENU = [
    ('Ribeye Steak', 'Steaks', Decimal('45.99'), 50),
    ('Filet Mignon', 'Steaks', Decimal('52.99'), 40),
    ('T-Bone Steak', 'Steaks', Decimal('48.99'), 8),
    ('Wagyu Burger', 'Burgers', Decimal('28.99'), 30),
    ('Lobster Tail', 'Seafood', Decimal('42.99'), 25),
]


class Command(BaseCommand):
    help = 'Create demo branches, users for every role and a stocked menu'

    def add_arguments(self, parser):
        parser.add_argument(
            '--password',
            type=str,
            default=DEMO_PASSWORD,
            help='Password for every demo user',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        password = options['password']

        self.stdout.write('=' * 70)
        self.stdout.write('Creating Demo Data')
        self.stdout.write('=' * 70)

        self.stdout.write('\n1. Branches...')
        branches = []
        for data in DEMO_BRANCHES:
            branch, created = Branch.objects.get_or_create(
                name=data['name'],
                defaults={key: value for key, value in data.items() if key != 'name'},
            )
            branches.append(branch)
            self._report(created, f'branch {branch.name} (id={branch.id})')
        home = branches[0]

        self.stdout.write('\n2. Users...')
        for data in DEMO_USERS:
            user = User.objects.by_email(data['email'])
            created = user is None
            if created:
                user = User.objects.create_user(
                    email=data['email'],
                    password=password,
                    name=data['name'],
                    role=data['role'],
                    branch=home,
                )
            self._report(created, f'{user.email} ({user.role})')

        self.stdout.write('\n3. Menu and stock...')
        for name, category, price, quantity in DEMO_MENU:
            menu_item, created = MenuItem.objects.get_or_create(
                branch=home,
                name=name,
                defaults={'category': category, 'price': price},
            )
            InventoryItem.objects.get_or_create(
                branch=home,
                menu_item=menu_item,
                defaults={'quantity': quantity},
            )
            self._report(created, f'{name} @ {price} ({quantity} in stock)')

        self.stdout.write('\n' + '=' * 70)
        self.stdout.write(f'Every demo user signs in with password: {password}')
        self.stdout.write('=' * 70)

    def _report(self, created, label):
        if created:
            self.stdout.write(self.style.SUCCESS(f'   ✓ Created {label}'))
        else:
            self.stdout.write(self.style.HTTP_INFO(f'     Exists: {label}'))
