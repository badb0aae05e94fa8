"""Pydantic request/response schemas for the authentication API.

These are external contracts (anti-corruption layer) — separate from the
protean commands they are translated into.
"""

from pydantic import BaseModel


class UserSchema(BaseModel):
    id: str
    name: str
    email: str
    role: str


class RegisterRequest(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Ada Lovelace",
                    "email": "ada@example.com",
                    "password": "correct horse battery staple",
                }
            ]
        }
    }


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class SessionResponse(BaseModel):
    token: str
    user: UserSchema


class AccessTokenResponse(BaseModel):
    token: str


class OkResponse(BaseModel):
    ok: bool = True
