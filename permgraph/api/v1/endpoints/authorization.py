"""Authorization API: decide batches of (action, target) requests for a principal."""

from typing import Annotated

from fastapi import APIRouter, Depends

from permgraph.api.v1.dependencies import get_authorization_service, get_principal_directory
from permgraph.application.interfaces import IPrincipalDirectory
from permgraph.application.services import AuthorizationService
from permgraph.domain.entities import TargetRef
from permgraph.domain.exceptions import ResourceNotFoundException
from permgraph.schemas.authorization import AuthorizeRequest, AuthorizeResponse

router = APIRouter()


@router.post("", response_model=AuthorizeResponse)
async def authorize(
    body: AuthorizeRequest,
    authorization: Annotated[AuthorizationService, Depends(get_authorization_service)],
    directory: Annotated[IPrincipalDirectory, Depends(get_principal_directory)],
) -> AuthorizeResponse:
    """Return allowed=True only if every request in the batch is allowed."""
    principal = await directory.get_principal(body.principal_id)
    if principal is None:
        raise ResourceNotFoundException("principal", body.principal_id)
    requests = [
        (item.action, TargetRef(id=item.target_id, owner=item.owner_id))
        for item in body.requests
    ]
    denied = await authorization.first_denied(principal, requests)
    if denied is None:
        return AuthorizeResponse(allowed=True)
    action, target = denied
    return AuthorizeResponse(allowed=False, denied_action=action, denied_target_id=target.id)
