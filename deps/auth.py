from typing import Annotated, Optional

from fastapi import Header

import config


def admin_token_error(
    x_admin_token: Annotated[Optional[str], Header(alias="x-admin-token")] = None,
) -> Optional[str]:
    """
    Admin guard for the reload endpoint. Returns an error message, or None when
    the X-Admin-Token header matches ADMIN_TOKEN.
    """
    expected = config.admin_token()
    if not expected:
        return "ADMIN_TOKEN not configured on server."
    if x_admin_token != expected:
        return "unauthorized"
    return None
