from fastapi import HTTPException, Security
from fastapi.security.api_key import APIKeyHeader

from app.core.security import admin_key_matches

admin_key_header = APIKeyHeader(name="X-Admin-Key", auto_error=False)


async def require_admin(admin_key: str | None = Security(admin_key_header)) -> None:
    if not admin_key_matches(admin_key):
        raise HTTPException(status_code=401, detail="Admin key required")
