"""
Ticket artifact addressing.

The artifact file of a ticket is a pure function of its token, so the
redemption flow and cleanup can find it without a lookup.
"""

from urllib.parse import urlencode

from django.conf import settings

ARTIFACT_PREFIX = 'qr_'
ARTIFACT_EXTENSION = '.png'


def artifact_filename(token: str) -> str:
    """``qr_<TOKEN>.png``"""
    return f'{ARTIFACT_PREFIX}{token}{ARTIFACT_EXTENSION}'


def artifact_public_path(token: str, directory: str = None) -> str:
    """Public path of the artifact, e.g. ``/tickets/qr_<TOKEN>.png``."""
    directory = (directory or settings.TICKETS_DIR).strip('/')
    return f'/{directory}/{artifact_filename(token)}'


def build_registration_url(base_registration_url: str, token: str) -> str:
    """Payload encoded in a ticket's QR code: ``<base>?token=<TOKEN>``."""
    return f'{base_registration_url}?{urlencode({"token": token})}'


def default_registration_base_url() -> str:
    return f'{settings.SERVER_URL.rstrip("/")}{settings.REGISTRATION_PATH}'
