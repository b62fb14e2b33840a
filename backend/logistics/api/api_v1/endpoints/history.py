"""
变更历史API（只读）
"""
from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.core.deps import get_db
from logistics.schemas.change_history import ChangeHistoryResponse, ChangeHistoryListResponse
from logistics.services.change_history import get_change_history

router = APIRouter()


@router.get("/{entity_type}/{entity_id}", response_model=ChangeHistoryListResponse)
async def list_history(
    *,
    db: AsyncSession = Depends(get_db),
    entity_type: str,
    entity_id: int) -> Any:
    """获取实体的变更历史（最新在前）"""
    history = await get_change_history(db, entity_type, entity_id)
    return ChangeHistoryListResponse(
        data=[ChangeHistoryResponse.model_validate(h) for h in history],
        total=len(history)
    )
