# portal/schemas/user.py

from pydantic import BaseModel


class UserCreate(BaseModel):
    external_id: str
    name: str
    password: str
    role: str = "learner"
    team_id: str | None = None


class UserUpdate(BaseModel):
    name: str | None = None
    role: str | None = None
    # null moves the user out of their team
    team_id: str | None = None


class RegisterRequest(BaseModel):
    external_id: str
    name: str
    password: str


class UserResponse(BaseModel):
    id: int
    external_id: str
    name: str
    role: str
    team_id: str | None = None

    model_config = {"from_attributes": True}


class UserLogin(BaseModel):
    external_id: str
    password: str
