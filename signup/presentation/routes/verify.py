from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import RedirectResponse

from signup.application.activation_workflow import ActivationWorkflow
from signup.domain.entities import TenantContext
from signup.domain.errors import InvalidOrExpiredCode
from signup.presentation.dependencies import get_tenant, get_workflow
from signup.schemas.responses import AccountActivatedOut

router = APIRouter(tags=["Activation"])


@router.get("/verify_user", response_model=AccountActivatedOut)
async def get_verify_user(
    tenant: Annotated[TenantContext, Depends(get_tenant)],
    workflow: Annotated[ActivationWorkflow, Depends(get_workflow)],
    code: Annotated[str, Query(min_length=1, max_length=255)],
    email: Annotated[str | None, Query()] = None,
):
    # `email` is only echoed in the link for display; the code authorizes.
    try:
        result = await workflow.complete_activation(tenant, code)
    except InvalidOrExpiredCode:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="invalid or expired activation code",
        )

    if result.redirect_url:
        return RedirectResponse(result.redirect_url, status_code=status.HTTP_302_FOUND)
    return AccountActivatedOut(
        user_id=result.user_id, email=result.email, redirect_url=None
    )
