from typing import Literal

from pydantic import BaseModel, Field


class AcceptedOut(BaseModel):
    status: Literal["accepted"] = "accepted"


class AccountActivatedOut(BaseModel):
    user_id: str = Field(..., description="Id of the activated user")
    email: str = Field(..., description="Email of the activated user")
    redirect_url: str | None = Field(None, description="Client signup redirect, if any")


class CodeStatusOut(BaseModel):
    valid: bool
