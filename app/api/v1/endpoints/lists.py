from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.db import get_db
from app.schemas.common import MessageResponse
from app.schemas.distribution import DistributionOut, UploadOut
from app.services.assignment_store import AssignmentStore
from app.services.assignments import read_distribution
from app.services.auth import require_admin
from app.services.list_upload import run_upload

router = APIRouter(prefix="/list", dependencies=[Depends(require_admin)])


@router.post("/upload", response_model=UploadOut)
async def upload_and_distribute(
    file: UploadFile | None = File(default=None),
    db: AsyncSession = Depends(get_db),
) -> UploadOut:
    result = await run_upload(
        db,
        file,
        upload_dir=settings.upload_dir,
        max_bytes=settings.max_upload_bytes,
    )
    return UploadOut.from_result(result, message="File uploaded and distributed successfully")


@router.get("/agents", response_model=DistributionOut)
async def distributed_lists(db: AsyncSession = Depends(get_db)) -> DistributionOut:
    return DistributionOut.from_result(await read_distribution(db))


@router.delete("/items/{item_id}", response_model=MessageResponse)
async def delete_list_item(item_id: str, db: AsyncSession = Depends(get_db)) -> MessageResponse:
    await AssignmentStore(db).delete_by_id(item_id)
    await db.commit()
    return MessageResponse(message="List item deleted successfully")
