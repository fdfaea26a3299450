from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class camel_model(BaseModel):
    # wire format is camelCase, python attributes stay snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthenticationRequest(camel_model):
    username: str = Field(..., title="Username")
    password: str = Field(..., title="Password")


class AuthenticationResponse(camel_model):
    token: str = Field("", title="Mock JWT token")
    expires: datetime = Field(..., title="Token expiry (UTC)")
    username: str = Field("", title="Authenticated username")
    message: str = Field("", title="Welcome message")


class UserLoginRequest(camel_model):
    username: Optional[str] = Field(None, title="Username")
    password: Optional[str] = Field(None, title="Password")


class UserLoginResponse(camel_model):
    message: str = Field("", title="Welcome message")


class CreateAccountRequest(camel_model):
    username: str = Field(..., title="Username for the new account")
    password: str = Field(..., title="Password for the new account")


class CreateAccountResponse(camel_model):
    success: bool = Field(False, title="Whether the account was created")
    message: str = Field("", title="Result message")
    user_id: Optional[str] = Field(None, title="Sequential id of the created user")
    username: str = Field("", title="Username of the account")
    created_at: Optional[datetime] = Field(None, title="Creation timestamp (UTC)")
    created_by: str = Field("", title="User who created the account")


class TokenData(BaseModel):
    username: Optional[str] = None


class res(BaseModel):
    message: str
