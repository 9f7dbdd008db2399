# api/services/accounts.py
import logging

from django.contrib.auth import authenticate, get_user_model
from django.db import IntegrityError, transaction
from rest_framework_simplejwt.tokens import AccessToken

from ..exceptions import AuthError, ConflictError

logger = logging.getLogger(__name__)

User = get_user_model()

INVALID_CREDENTIALS = "Invalid credentials"
EMAIL_TAKEN = "Email already registered"


def generate_token(user):
    return str(AccessToken.for_user(user))


def register(name, email, password):
    """Create a user and return (user, token)."""
    if User.objects.filter(email=email).exists():
        raise ConflictError(EMAIL_TAKEN)

    try:
        with transaction.atomic():
            # username mirrors the email; login goes through the email field
            user = User.objects.create_user(username=email, email=email, password=password, name=name)
    except IntegrityError:  # concurrent registration with the same email
        raise ConflictError(EMAIL_TAKEN)

    logger.info("Registered user %s (%s)", user.pk, user.email)
    return user, generate_token(user)


def login(email, password):
    """
    Return (user, token) for valid credentials.

    Unknown emails and wrong passwords fail with the same error so callers
    cannot tell which accounts exist.
    """
    user = authenticate(username=email, password=password)
    if user is None:
        logger.warning("Failed login for %s", email)
        raise AuthError(INVALID_CREDENTIALS)
    return user, generate_token(user)

