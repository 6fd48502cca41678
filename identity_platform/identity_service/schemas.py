from pydantic import BaseModel, EmailStr

from typing import Optional


class SignupInput(BaseModel):
    name: Optional[str] = None
    email: EmailStr
    password: str


class SigninInput(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    message: str
    token: str


class MessageResponse(BaseModel):
    message: str
