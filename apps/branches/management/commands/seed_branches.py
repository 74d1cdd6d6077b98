"""
Management command to create the sample branches (London, Paris, Madrid).
Existing branches with the same name and city are left untouched.
"""
from django.core.management.base import BaseCommand
from apps.branches.services import BranchService


class Command(BaseCommand):
    help = 'Create the sample branches if they do not exist yet'

    def handle(self, *args, **options):
        summary = BranchService.seed_sample_branches()

        for entry in summary:
            if entry['status'] == 'created':
                self.stdout.write(self.style.SUCCESS(f"✓ Created branch: {entry['name']} (id={entry['id']})"))
            else:
                self.stdout.write(self.style.HTTP_INFO(f"  Exists: {entry['name']} (id={entry['id']})"))

        created = sum(1 for entry in summary if entry['status'] == 'created')
        self.stdout.write(f"\n{created} created, {len(summary) - created} skipped")
