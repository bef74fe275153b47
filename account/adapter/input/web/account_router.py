from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from account.application.usecase.account_usecase import AccountUseCase
from tracking.adapter.input.web.dependencies import get_account_usecase

account_router = APIRouter(tags=["account"])


class RegisterAccountRequest(BaseModel):
    account_id: str = Field(min_length=1, max_length=255)
    display_name: str | None = Field(default=None, max_length=255)
    access_token: str | None = Field(default=None, description="OAuth access token for the YouTube Data API")
    channel_id: str | None = Field(default=None, max_length=100)


class UpdateAccountRequest(BaseModel):
    display_name: str | None = Field(default=None, max_length=255)
    access_token: str | None = None
    channel_id: str | None = Field(default=None, max_length=100)


def _account_to_dict(account):
    # tokens are never echoed back
    return {
        "id": account.account_id,
        "display_name": account.display_name,
        "channel_id": account.channel_id,
        "has_access_token": bool(account.access_token),
        "created_at": account.created_at,
        "updated_at": account.updated_at,
    }


@account_router.get("")
def list_accounts(usecase: AccountUseCase = Depends(get_account_usecase)):
    return [_account_to_dict(a) for a in usecase.list_accounts()]


@account_router.post("")
def register_account(request: RegisterAccountRequest, usecase: AccountUseCase = Depends(get_account_usecase)):
    account = usecase.register_account(
        request.account_id.strip(),
        display_name=request.display_name,
        access_token=request.access_token,
        channel_id=request.channel_id,
    )
    return _account_to_dict(account)


@account_router.get("/{account_id}")
def get_account(account_id: str, usecase: AccountUseCase = Depends(get_account_usecase)):
    try:
        account = usecase.get_account(account_id)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return _account_to_dict(account)


@account_router.patch("/{account_id}")
def update_account(
    account_id: str,
    request: UpdateAccountRequest,
    usecase: AccountUseCase = Depends(get_account_usecase),
):
    try:
        account = usecase.update_account(
            account_id,
            display_name=request.display_name,
            access_token=request.access_token,
            channel_id=request.channel_id,
        )
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return _account_to_dict(account)


@account_router.delete("/{account_id}")
def delete_account(account_id: str, usecase: AccountUseCase = Depends(get_account_usecase)):
    try:
        usecase.remove_account(account_id)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return {"deleted": True}
