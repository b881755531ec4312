"""Caller identity resolution and role checks.

A request always gets a context, even when it carries no credential or a bad
one. Only mutations call :func:`authorize`; reads never look at the context.

Only `Authorization: Bearer ...` headers count as credentials. Any other
scheme (`Basic ...`) resolves to :class:`Anonymous`, so it is never rejected
as an invalid token, even with `REJECT_INVALID_TOKENS` set. Login does not
resolve a context at all, so a stale token never blocks getting a new one.
"""

import logging
from collections.abc import Collection
from dataclasses import dataclass

import jwt

from staff_directory.auth import jwt_handler
from staff_directory.auth.passwords import verify_password
from staff_directory.core.errors import Forbidden, InvalidCredentials, Unauthenticated
from staff_directory.models.user import AuthUser, Role
from staff_directory.store import UserDirectory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Anonymous:
    """No bearer credential was supplied."""


@dataclass(frozen=True)
class Authenticated:
    user: AuthUser


@dataclass(frozen=True)
class InvalidToken:
    """A credential was supplied but did not verify."""

    reason: str


AuthContext = Anonymous | Authenticated | InvalidToken


@dataclass(frozen=True)
class AuthPayload:
    token: str
    user: AuthUser


def login(users: UserDirectory, username: str, password: str) -> AuthPayload:
    user = users.find_by_username(username)
    if user is None or not verify_password(password, user.password_hash):
        logger.warning('Login failed for username=%r', username)
        raise InvalidCredentials()

    public_user = user.public()
    token = jwt_handler.create_access_token(public_user)
    logger.info('Issued access token for user id=%s role=%s', user.id, user.role.value)
    return AuthPayload(token=token, user=public_user)


def resolve_context(token: str | None) -> AuthContext:
    if not token:
        return Anonymous()

    try:
        payload = jwt_handler.decode_access_token(token)
    except jwt.ExpiredSignatureError:
        logger.warning('Rejected expired access token')
        return InvalidToken(reason='Token expired')
    except jwt.InvalidTokenError as exc:
        logger.warning('Rejected invalid access token: %s', exc)
        return InvalidToken(reason='Invalid token')

    try:
        user = jwt_handler.user_from_claims(payload)
    except ValueError as exc:
        logger.warning('Rejected access token with bad claims: %s', exc)
        return InvalidToken(reason='Invalid token claims')

    return Authenticated(user=user)


def authorize(context: AuthContext, required_roles: Collection[Role]) -> AuthUser:
    if isinstance(context, InvalidToken):
        raise Unauthenticated(f'Not authenticated: {context.reason}')
    if not isinstance(context, Authenticated):
        raise Unauthenticated()

    if context.user.role not in required_roles:
        logger.warning(
            'User id=%s with role %s denied; requires one of %s',
            context.user.id,
            context.user.role.value,
            sorted(role.value for role in required_roles),
        )
        raise Forbidden()

    return context.user


def current_user(context: AuthContext) -> AuthUser | None:
    if isinstance(context, Authenticated):
        return context.user
    return None
