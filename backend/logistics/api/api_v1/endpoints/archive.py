"""
档案API - 文件夹树和资料登记
"""
from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.core.deps import get_db, get_current_user_id
from logistics.models.archive import ArchiveFolder
from logistics.schemas.archive import (
    ArchiveFolderCreate,
    ArchiveFolderUpdate,
    ArchiveFolderResponse,
    ArchiveMaterialCreate,
    ArchiveMaterialUpdate,
    ArchiveMaterialResponse,
    ArchiveFolderContents)
from logistics.services import registry

router = APIRouter()


@router.get("/", response_model=ArchiveFolderContents)
async def get_folder_contents(
    *,
    db: AsyncSession = Depends(get_db),
    folder_id: Optional[int] = Query(None, description="文件夹ID，空为根目录")) -> Any:
    """获取文件夹内容（子文件夹 + 资料）"""
    folder = None
    if folder_id:
        folder = await db.get(ArchiveFolder, folder_id)
        if not folder:
            raise HTTPException(status_code=404, detail="文件夹不存在")
    folders = await registry.list_archive_folders(db, folder_id)
    materials = await registry.list_archive_materials(db, folder_id)
    return ArchiveFolderContents(
        folder=ArchiveFolderResponse.model_validate(folder) if folder else None,
        folders=[ArchiveFolderResponse.model_validate(f) for f in folders],
        materials=[ArchiveMaterialResponse.model_validate(m) for m in materials]
    )


@router.post("/folders", response_model=ArchiveFolderResponse)
async def create_folder(
    *,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    folder_in: ArchiveFolderCreate) -> Any:
    """创建文件夹"""
    folder = await registry.create_archive_folder(db, folder_in, user_id)
    return ArchiveFolderResponse.model_validate(folder)


@router.put("/folders/{folder_id}", response_model=ArchiveFolderResponse)
async def update_folder(
    *,
    db: AsyncSession = Depends(get_db),
    folder_id: int,
    folder_in: ArchiveFolderUpdate) -> Any:
    """更新文件夹"""
    folder = await registry.update_archive_folder(db, folder_id, folder_in)
    if not folder:
        raise HTTPException(status_code=404, detail="文件夹不存在")
    return ArchiveFolderResponse.model_validate(folder)


@router.delete("/folders/{folder_id}")
async def delete_folder(
    *,
    db: AsyncSession = Depends(get_db),
    folder_id: int) -> Any:
    """删除空文件夹"""
    if not await registry.delete_archive_folder(db, folder_id):
        raise HTTPException(status_code=404, detail="文件夹不存在")
    return {"message": "文件夹已删除"}


@router.post("/materials", response_model=ArchiveMaterialResponse)
async def create_material(
    *,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    material_in: ArchiveMaterialCreate) -> Any:
    """登记资料"""
    material = await registry.create_archive_material(db, material_in, user_id)
    return ArchiveMaterialResponse.model_validate(material)


@router.put("/materials/{material_id}", response_model=ArchiveMaterialResponse)
async def update_material(
    *,
    db: AsyncSession = Depends(get_db),
    material_id: int,
    material_in: ArchiveMaterialUpdate) -> Any:
    """更新资料"""
    material = await registry.update_archive_material(db, material_id, material_in)
    if not material:
        raise HTTPException(status_code=404, detail="资料不存在")
    return ArchiveMaterialResponse.model_validate(material)


@router.delete("/materials/{material_id}")
async def delete_material(
    *,
    db: AsyncSession = Depends(get_db),
    material_id: int) -> Any:
    """删除资料"""
    if not await registry.delete_archive_material(db, material_id):
        raise HTTPException(status_code=404, detail="资料不存在")
    return {"message": "资料已删除"}
