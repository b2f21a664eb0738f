"""
Bearer credential extraction.

Clients send the raw token in a dedicated ``Bearer`` header::

    Bearer: <token>

The same header carries access tokens for protected endpoints and refresh
tokens for ``/refresh`` and ``/revoke``.
"""

from typing import Mapping

from chirpy.auth.errors import MissingCredentialError

BEARER_HEADER = "Bearer"


def extract_bearer_token(metadata: Mapping[str, str], field: str = BEARER_HEADER) -> str:
    """
    Pull the raw token out of request headers.

    Surrounding whitespace is stripped so a padded token round-trips to the
    exact original.

    Raises:
        MissingCredentialError: If the header is absent, blank, or the value
            contains inner whitespace
    """
    raw = metadata.get(field)
    if raw is None:
        raise MissingCredentialError(f"header does not contain {field} field")

    token = raw.strip()
    if not token:
        raise MissingCredentialError(f"{field} header is empty")
    if any(c.isspace() for c in token):
        raise MissingCredentialError(f"{field} header value is malformed")

    return token
