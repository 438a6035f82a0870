# accounts/services.py
"""
Identity and credentials: registration, login, stateless access tokens and
profile management. Tokens are simplejwt access tokens; nothing is stored
server-side, so logout is a client-side discard.
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.tokens import AccessToken

from tracker.exceptions import Conflict, InvalidCredentials
from .models import User

logger = logging.getLogger(__name__)

# Unknown emails still pay for one hash
_DUMMY_PASSWORD = 'not-a-real-password'


def issue_token(user):
    return str(AccessToken.for_user(user))


def verify_token(token):
    """Return the user id carried by a valid access token."""
    try:
        access = AccessToken(token)
    except TokenError as e:
        logger.warning(f"Token verification failed: {str(e)} at {timezone.now()}")
        raise InvalidToken('Invalid or expired token.')
    return access['user_id']


def register(email, username, first_name, last_name, password):
    email = User.objects.normalize_email(email)
    if User.objects.filter(email__iexact=email).exists():
        logger.warning(f"Registration rejected, email {email} already in use at {timezone.now()}")
        raise Conflict('User with this email already exists.')
    if User.objects.filter(username=username).exists():
        logger.warning(f"Registration rejected, username {username} already in use at {timezone.now()}")
        raise Conflict('User with this username already exists.')

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                username=username,
                password=password,
                first_name=first_name,
                last_name=last_name,
            )
    except IntegrityError:
        raise Conflict('User with this email or username already exists.')

    logger.info(f"User {user.id} registered at {timezone.now()}")
    return user, issue_token(user)


def login(email, password):
    user = User.objects.filter(email__iexact=email).first()
    if user is None:
        User().set_password(_DUMMY_PASSWORD)
        logger.warning(f"Login failed for unknown email at {timezone.now()}")
        raise InvalidCredentials()
    if not user.check_password(password) or not user.is_active:
        logger.warning(f"Login failed for user {user.id} at {timezone.now()}")
        raise InvalidCredentials()

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])
    logger.info(f"User {user.id} logged in at {timezone.now()}")
    return user, issue_token(user)


def get_user(user_id):
    try:
        return User.objects.get(id=user_id)
    except (User.DoesNotExist, DjangoValidationError):
        raise NotFound('User not found.')


def update_profile(user, **fields):
    username = fields.get('username')
    if username and User.objects.filter(username=username).exclude(id=user.id).exists():
        raise Conflict('Username is already taken.')

    for name, value in fields.items():
        setattr(user, name, value)
    user.save()
    logger.info(f"Profile of user {user.id} updated ({', '.join(fields)}) at {timezone.now()}")
    return user


def change_password(user, current_password, new_password):
    if not user.check_password(current_password):
        logger.warning(f"Password change rejected for user {user.id} at {timezone.now()}")
        raise InvalidCredentials('Current password is incorrect.')
    user.set_password(new_password)
    user.save(update_fields=['password', 'updated_at'])
    logger.info(f"Password changed for user {user.id} at {timezone.now()}")


def delete_account(user):
    user_id = user.id
    user.delete()
    logger.info(f"User {user_id} deleted their account at {timezone.now()}")
