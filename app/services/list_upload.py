from __future__ import annotations

import logging
import os
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.services.agent_directory import AgentDirectory
from app.services.assignments import DistributionResult, materialize
from app.services.distribution import distribute
from app.services.errors import FileTooLargeError, MissingFileError
from app.services.roster import select_roster
from app.services.schema_validator import validate_rows
from app.services.tabular_parser import format_for_filename, parse_table

log = logging.getLogger(__name__)

READ_CHUNK_BYTES = 64 * 1024


@asynccontextmanager
async def stored_upload(upload: UploadFile, *, upload_dir: str | Path, max_bytes: int) -> AsyncIterator[Path]:
    """
    Copy the upload into a temporary file under ``upload_dir`` and yield its
    path. The file is removed when the block exits, however it exits.
    """
    directory = Path(upload_dir)
    directory.mkdir(parents=True, exist_ok=True)

    fd, name = tempfile.mkstemp(prefix="upload-", suffix=Path(upload.filename or "").suffix.lower(), dir=directory)
    path = Path(name)
    try:
        written = 0
        with os.fdopen(fd, "wb") as handle:
            while True:
                chunk = await upload.read(READ_CHUNK_BYTES)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_bytes:
                    raise FileTooLargeError()
                handle.write(chunk)
        yield path
    finally:
        path.unlink(missing_ok=True)


async def run_upload(
    db: AsyncSession,
    upload: UploadFile | None,
    *,
    upload_dir: str | Path,
    max_bytes: int,
) -> DistributionResult:
    """
    Parse, validate, pick the roster, split and save one uploaded list.
    Any stage failure aborts the whole upload before anything is written.
    """
    if upload is None or not upload.filename:
        raise MissingFileError()
    fmt = format_for_filename(upload.filename)

    async with stored_upload(upload, upload_dir=upload_dir, max_bytes=max_bytes) as path:
        table = await run_in_threadpool(parse_table, path, fmt)

    records = validate_rows(table)

    agents = await AgentDirectory(db).list_agents()
    roster = select_roster(agents)

    buckets = distribute(records, roster)
    result = await materialize(db, buckets)

    log.info("Upload %s distributed: %d items", upload.filename, result.total_items)
    return result
