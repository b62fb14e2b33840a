"""
订单管理API模块

按功能拆分为多个子模块：
- core: 响应构建
- crud: 订单的创建、读取、更新、删除，全量重算
- items: 订单下的明细、从库存添加、客户查询码
"""

from fastapi import APIRouter
from .crud import router as crud_router
from .items import router as items_router

router = APIRouter()

# 合并所有路由
router.include_router(crud_router)
router.include_router(items_router)
