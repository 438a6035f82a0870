# projects/management/commands/seed.py
import datetime
import logging

from django.core.management.base import BaseCommand
from django.db import transaction

from accounts.models import User
from projects import services as project_services
from projects.models import Project, ProjectMember
from workspace.board import services as board_services
from workspace.comments import services as comment_services
from workspace.tasks import services as task_services
from workspace.tasks.models import Task

logger = logging.getLogger(__name__)

DEMO_USERS = [
    ('john@example.com', 'john_doe', 'John', 'Doe', 'Project manager and tech enthusiast'),
    ('jane@example.com', 'jane_smith', 'Jane', 'Smith', 'Full-stack developer'),
    ('bob@example.com', 'bob_wilson', 'Bob', 'Wilson', 'UI/UX designer'),
]


class Command(BaseCommand):
    help = 'Load demo users, projects, tasks and comments'

    def add_arguments(self, parser):
        parser.add_argument('--password', default='password123', help='Password for every demo user')

    def handle(self, *args, **options):
        john, jane, bob = [self.get_user(*row, password=options['password']) for row in DEMO_USERS]

        if Project.objects.filter(owner=john, name='Website Redesign').exists():
            logger.info("Demo data already present, skipping seed")
            self.stdout.write(self.style.WARNING("Demo data already present"))
            return

        with transaction.atomic():
            self.seed_projects(john, jane, bob)

        self.stdout.write(self.style.SUCCESS(
            f"Seed completed: {User.objects.count()} users, {Project.objects.count()} projects, "
            f"{Task.objects.count()} tasks"
        ))

    def get_user(self, email, username, first_name, last_name, bio, password):
        user = User.objects.filter(email=email).first()
        if user is None:
            user = User.objects.create_user(
                email=email,
                username=username,
                password=password,
                first_name=first_name,
                last_name=last_name,
                bio=bio,
            )
            logger.info(f"Created demo user {user.email}")
        return user

    def seed_projects(self, john, jane, bob):
        website = project_services.create_project(
            john, 'Website Redesign', description='Complete redesign of the company website', color='#3B82F6'
        )
        project_services.create_project(
            john, 'Mobile App Development', description='Build a new mobile application', color='#10B981'
        )
        for user in (jane, bob):
            project_services.add_member(website.id, john, user.id, ProjectMember.MEMBER)

        board = website.boards.get(position=0)
        review = board_services.create_column(board.id, john, 'Review', color='#F59E0B')
        board_services.update_column(review.id, john, position=2)
        todo, in_progress, review, done = list(board.columns.order_by('position'))

        mockups = self.add_task(
            john, in_progress, 'Design homepage mockups', Task.HIGH, Task.IN_PROGRESS,
            description='Create wireframes and mockups for the new homepage design',
            assignee=bob, due_date=datetime.date(2024, 2, 15),
        )
        self.add_task(
            john, done, 'Set up development environment', Task.MEDIUM, Task.DONE,
            description='Configure development tools and dependencies', assignee=jane,
        )
        self.add_task(
            john, todo, 'Research user requirements', Task.HIGH, Task.TODO,
            description='Conduct user interviews and gather requirements',
            assignee=john, due_date=datetime.date(2024, 2, 10),
        )
        auth = self.add_task(
            john, review, 'Implement authentication system', Task.HIGH, Task.REVIEW,
            description='Build user registration and login functionality', assignee=jane,
        )

        comment_services.add_comment(mockups.id, john, 'Great progress on the mockups! The layout looks clean and modern.')
        comment_services.add_comment(mockups.id, bob, "Thanks! I'll have the final version ready by tomorrow.")
        comment_services.add_comment(auth.id, jane, 'The authentication system is ready for review. All tests are passing.')

    def add_task(self, creator, column, title, priority, status, description=None, assignee=None, due_date=None):
        task = task_services.create_task(
            column.id, creator, title,
            description=description,
            priority=priority,
            due_date=due_date,
            assignee_id=assignee.id if assignee else None,
        )
        if status != Task.TODO:
            task = task_services.update_task(task.id, creator, status=status)
        return task
