from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.agent import AgentCreate, AgentDeleted, AgentList, AgentOut, AgentSaved, AgentUpdate
from app.services.agent_directory import AgentDirectory
from app.services.auth import require_admin

router = APIRouter(prefix="/agents", dependencies=[Depends(require_admin)])


@router.post("", response_model=AgentSaved, status_code=201)
@router.post("/add", response_model=AgentSaved, status_code=201, include_in_schema=False)
async def create_agent(payload: AgentCreate, db: AsyncSession = Depends(get_db)) -> AgentSaved:
    agent = await AgentDirectory(db).create_agent(
        name=payload.name,
        email=str(payload.email),
        mobile=payload.mobile,
        password=payload.password,
    )
    return AgentSaved(message="Agent created successfully", agent=AgentOut.model_validate(agent))


@router.get("", response_model=AgentList)
async def list_agents(db: AsyncSession = Depends(get_db)) -> AgentList:
    agents = await AgentDirectory(db).list_agents()
    return AgentList(agents=[AgentOut.model_validate(a) for a in agents])


@router.put("/{agent_id}", response_model=AgentSaved)
async def update_agent(agent_id: str, payload: AgentUpdate, db: AsyncSession = Depends(get_db)) -> AgentSaved:
    agent = await AgentDirectory(db).update_agent(
        agent_id,
        name=payload.name,
        email=str(payload.email) if payload.email is not None else None,
        mobile=payload.mobile,
        password=payload.password,
    )
    return AgentSaved(message="Agent updated successfully", agent=AgentOut.model_validate(agent))


@router.delete("/{agent_id}", response_model=AgentDeleted)
async def delete_agent(agent_id: str, db: AsyncSession = Depends(get_db)) -> AgentDeleted:
    removed = await AgentDirectory(db).delete_agent(agent_id)
    return AgentDeleted(message="Agent deleted successfully", deleted_items=removed)
