from pydantic import BaseModel


class LoginRequest(BaseModel):
    password: str


class SessionTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class SessionStatusResponse(BaseModel):
    authenticated: bool
