from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from signup.application.activation_workflow import ActivationWorkflow
from signup.domain.entities import TenantContext
from signup.domain.errors import (
    DuplicateAccount,
    PasswordPolicyViolation,
    UserNotFound,
)
from signup.domain.ports.code_store import CodeStorePort
from signup.presentation.dependencies import get_code_store, get_tenant, get_workflow
from signup.schemas.requests import AccountCreateIn, VerificationCodeResendIn
from signup.schemas.responses import AcceptedOut, CodeStatusOut

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.post("", status_code=status.HTTP_202_ACCEPTED, response_model=AcceptedOut)
async def post_create_account(
    body: AccountCreateIn,
    tenant: Annotated[TenantContext, Depends(get_tenant)],
    workflow: Annotated[ActivationWorkflow, Depends(get_workflow)],
):
    try:
        await workflow.begin_activation(
            tenant, email=body.email, password=body.password, client_id=body.client_id
        )
    except PasswordPolicyViolation as e:
        raise HTTPException(
            status_code=422, detail=e.reason
        )
    except DuplicateAccount:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="account already exists"
        )
    return AcceptedOut()


@router.post(
    "/verification-code",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=AcceptedOut,
)
async def post_resend_verification_code(
    body: VerificationCodeResendIn,
    tenant: Annotated[TenantContext, Depends(get_tenant)],
    workflow: Annotated[ActivationWorkflow, Depends(get_workflow)],
):
    try:
        await workflow.resend_verification_code(
            tenant, email=body.email, client_id=body.client_id
        )
    except UserNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="no pending account"
        )
    return AcceptedOut()


@router.get("/codes/{code}", response_model=CodeStatusOut)
async def get_code_status(
    code: str,
    tenant: Annotated[TenantContext, Depends(get_tenant)],
    code_store: Annotated[CodeStorePort, Depends(get_code_store)],
):
    payload = await code_store.peek(code)
    return CodeStatusOut(
        valid=payload is not None and payload.get("zone_id") == tenant.zone_id
    )
