# academy/api/account.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from academy.clients.identity_provider import IdentityProviderClient
from academy.core.auth_deps import get_current_principal
from academy.core.deps import get_identity_provider
from academy.core.logging import log_tracked_request, track_api_request
from academy.core.principal import Principal
from academy.db.session import get_db
from academy.services.account_service import AccountService

router = APIRouter(prefix="/account", dependencies=[Depends(track_api_request)])


@router.delete("/delete")
def delete_account(
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    identity_provider: IdentityProviderClient = Depends(get_identity_provider),
):
    report = AccountService(db, identity_provider).delete_account(principal)

    log_tracked_request(request, 200, failed_tables=report.failed_tables)
    return {"success": True}
