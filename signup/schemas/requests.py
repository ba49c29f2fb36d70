from pydantic import BaseModel, EmailStr, Field


class AccountCreateIn(BaseModel):
    email: EmailStr = Field(..., description="Email of the account", max_length=255)
    password: str = Field(..., description="Password of the account", max_length=255)
    client_id: str | None = Field(
        None, description="Client that started the signup", max_length=255
    )


class VerificationCodeResendIn(BaseModel):
    email: EmailStr = Field(..., description="Email of the pending account", max_length=255)
    client_id: str | None = Field(None, max_length=255)
