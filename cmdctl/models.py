from pydantic import BaseModel, Field


class CommandRequest(BaseModel):
    sender: str = Field(min_length=1)
    line: str


class CommandResponse(BaseModel):
    handled: bool
    messages: list[str] = Field(default_factory=list)


class CommandInfo(BaseModel):
    name: str
    aliases: list[str]
    permissions: list[str]
    sender_type: str
    description: str = ""
    usage: str = ""


class HealthResponse(BaseModel):
    status: str
    commands: int
