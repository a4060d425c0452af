# academy/core/auth_deps.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from academy.core.errors import UnauthorizedError
from academy.core.principal import Principal
from academy.core.security import decode_token

bearer = HTTPBearer(auto_error=False)


def get_optional_principal(
    request: Request,
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> Optional[Principal]:
    """
    Anonymous requests yield None. A present but invalid token is still a 401.
    """
    if creds is None:
        return None

    try:
        payload = decode_token(creds.credentials)
    except JWTError:
        raise UnauthorizedError("Invalid or expired token.")

    if not payload.get("sub"):
        raise UnauthorizedError("Token missing subject claim.")

    principal = Principal.from_claims(payload, access_token=creds.credentials)

    # Make principal available to downstream middleware / handlers
    request.state.principal = principal

    return principal


def get_current_principal(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    if principal is None:
        raise UnauthorizedError()
    return principal
