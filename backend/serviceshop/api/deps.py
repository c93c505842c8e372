import hmac
from typing import Optional

from fastapi import Depends, Header

from serviceshop.config import Settings, get_settings
from serviceshop.errors import Unauthorized


def require_admin_key(
    x_admin_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
):
    """Reject the request unless x-admin-key matches the configured ADMIN_KEY."""
    server_key = settings.ADMIN_KEY
    if not x_admin_key or not server_key:
        raise Unauthorized()
    if not hmac.compare_digest(x_admin_key.encode(), server_key.encode()):
        raise Unauthorized()
