import logging
import secrets
from functools import wraps

from django.conf import settings
from django.http import HttpResponseForbidden
from django.shortcuts import redirect
from django.utils import timezone

from .models import AdminUser
from .sessions import AdminSession, get_session_store

logger = logging.getLogger(__name__)

BACK_OFFICE_ROLES = ("admin", "product_admin")


class InvalidCredentials(ValueError):
    def __init__(self):
        super().__init__("Credenciais Inválidas")


def generate_session_token():
    return secrets.token_urlsafe(32)


def create_session(admin):
    session = AdminSession(
        token=generate_session_token(),
        admin_id=admin.id,
        role=admin.role,
        expires_at=timezone.now() + settings.ADMIN_SESSION_TTL,
    )
    get_session_store().set(session)
    return session


def login(username, password):
    """Check the credentials and open a session for the admin."""
    admin = AdminUser.objects.filter(username=username).first()
    if admin is None or not admin.check_password(password):
        logger.warning(f"[Admin Auth] Failed login for username={username!r}")
        raise InvalidCredentials()

    session = create_session(admin)
    logger.info(f"[Admin Auth] Admin {admin.id} logged in")
    return session


def logout(token):
    if token:
        get_session_store().delete(token)


def get_request_session(request):
    token = request.COOKIES.get(settings.ADMIN_SESSION_COOKIE)
    if not token:
        return None
    return get_session_store().get(token)


def is_authenticated(request):
    return get_request_session(request) is not None


def role_from_request(request):
    session = get_request_session(request)
    return session.role if session else None


def set_session_cookie(response, session):
    response.set_cookie(
        settings.ADMIN_SESSION_COOKIE,
        session.token,
        max_age=int(settings.ADMIN_SESSION_TTL.total_seconds()),
        path="/",
        secure=settings.ADMIN_SESSION_COOKIE_SECURE,
        httponly=True,
        samesite="Strict",
    )


def clear_session_cookie(response):
    response.delete_cookie(settings.ADMIN_SESSION_COOKIE, path="/", samesite="Strict")


def require_role(*roles):
    """Only let through requests carrying a live admin session with one of ``roles``.

    Anonymous or expired sessions are redirected to the login page; a session
    with another role gets a 403.
    """

    def decorator(view_func):
        @wraps(view_func)
        def wrapped(request, *args, **kwargs):
            session = get_request_session(request)
            if session is None:
                return redirect(settings.ADMIN_LOGIN_URL)
            if roles and session.role not in roles:
                logger.warning(
                    f"[Admin Auth] Admin {session.admin_id} with role {session.role} "
                    f"denied access to {request.path}"
                )
                return HttpResponseForbidden("Forbidden")

            request.admin_session = session
            return view_func(request, *args, **kwargs)

        return wrapped

    return decorator
