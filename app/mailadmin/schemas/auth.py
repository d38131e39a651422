from pydantic import BaseModel


class LoginRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "example": {
                "username": "admin",
                "password": "correct horse battery",
            }
        }
    }

    username: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    trace_id: str


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str


class ChangePasswordResponse(BaseModel):
    ok: bool
    message: str
    trace_id: str


class MeResponse(BaseModel):
    username: str
    admin: bool
    active: bool
    trace_id: str
