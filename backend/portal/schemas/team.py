from pydantic import BaseModel


class TeamCreate(BaseModel):
    id: str
    name: str
    track: str = "dev"


class TeamRead(BaseModel):
    id: str
    name: str
    track: str

    model_config = {"from_attributes": True}


class TeamUpdate(BaseModel):
    name: str | None = None
    track: str | None = None
