"""
Content Administration

Rebuilds the content index on demand, e.g. after new posts were copied into
the content directory.

Security
--------
All endpoints are protected by `verify_admin` which requires:
- `x-admin-key` header OR
- `key` query parameter

Rebuild Semantics
-----------------
The new index is built completely before it replaces the served one. If the
build fails (content root gone or unreadable) the old index keeps serving
and the request fails with a 500.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Header, status
from pydantic import BaseModel

from ..config import Settings
from ..content.store import IndexStore
from .dependencies import get_index_store, get_settings

router = APIRouter(prefix="/admin", tags=["admin"])


# ---------------------------------------------------------------------
# Security Dependency
# ---------------------------------------------------------------------

def verify_admin(
    settings: Annotated[Settings, Depends(get_settings)],
    x_admin_key: Optional[str] = Header(None, alias="x-admin-key"),
    key: Optional[str] = Query(None),
):
    """
    Verify the request is from an admin using the configured API key.
    Checks header first, then query param.
    """
    expected_key = settings.admin_api_key.get_secret_value() if settings.admin_api_key else None

    if not expected_key:
        # If no key is configured, disable admin access securely
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access is not configured (ADMIN_API_KEY missing)"
        )

    provided_key = x_admin_key or key

    if not provided_key or provided_key != expected_key:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or missing admin API key"
        )


# ---------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------

class ReindexResult(BaseModel):
    status: str
    posts: int
    rejected: int
    elapsed_ms: float


# ---------------------------------------------------------------------
# API Endpoints
# ---------------------------------------------------------------------

@router.post("/reindex", response_model=ReindexResult, dependencies=[Depends(verify_admin)])
def reindex(store: Annotated[IndexStore, Depends(get_index_store)]) -> ReindexResult:
    """
    Walk the content directory again and swap in the new index.
    """
    index = store.rebuild()
    return ReindexResult(
        status="reindexed",
        posts=len(index),
        rejected=len(index.rejected),
        elapsed_ms=round(index.elapsed.total_seconds() * 1000, 3),
    )
