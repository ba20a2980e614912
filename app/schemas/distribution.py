from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.schemas.agent import AgentOut
from app.services.assignments import DistributionResult


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ListItemOut(_CamelModel):
    id: str
    first_name: str
    phone: str
    notes: str


class DistributionEntryOut(_CamelModel):
    agent: AgentOut
    items: list[ListItemOut]


class DistributionOut(_CamelModel):
    distribution: list[DistributionEntryOut]
    total_items: int

    @classmethod
    def from_result(cls, result: DistributionResult, **extra) -> "DistributionOut":
        return cls(
            distribution=[
                DistributionEntryOut(
                    agent=AgentOut.model_validate(entry.agent),
                    items=[
                        ListItemOut(id=item.id, first_name=item.first_name, phone=item.phone, notes=item.notes)
                        for item in entry.items
                    ],
                )
                for entry in result.entries
            ],
            total_items=result.total_items,
            **extra,
        )


class UploadOut(DistributionOut):
    message: str
