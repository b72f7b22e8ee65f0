from typing import Annotated

from fastapi import APIRouter, Depends

from ..content.store import IndexStore
from .dependencies import get_index_store

router = APIRouter(tags=["health"])

@router.get("/health")
def health(store: Annotated[IndexStore, Depends(get_index_store)]):
    if not store.ready:
        return {"status": "starting", "posts": 0, "rejected": 0, "indexed_at": None}

    index = store.current
    return {
        "status": "ok",
        "posts": len(index),
        "rejected": len(index.rejected),
        "indexed_at": index.built_at.isoformat() if index.built_at else None,
    }
