from pydantic import BaseModel, ConfigDict, EmailStr, Field

E164_PATTERN = r"^\+[1-9]\d{1,14}$"


class AgentCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    mobile: str = Field(pattern=E164_PATTERN)
    password: str = Field(min_length=6)


class AgentUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    email: EmailStr | None = None
    mobile: str | None = Field(default=None, pattern=E164_PATTERN)
    password: str | None = Field(default=None, min_length=6)


class AgentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    mobile: str


class AgentList(BaseModel):
    agents: list[AgentOut]


class AgentSaved(BaseModel):
    message: str
    agent: AgentOut


class AgentDeleted(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    deleted_items: int = Field(alias="deletedItems")
