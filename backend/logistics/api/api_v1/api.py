"""V1 API 路由聚合 - 无认证模式（操作人由 X-User-Id 传入）"""
from fastapi import APIRouter

from logistics.api.api_v1.endpoints import (
    order_items, inventory, warehouses, trucks, counterparties,
    archive, history, tracking, search
)
# 使用拆分后的 orders 模块
from logistics.api.api_v1.endpoints.orders import router as orders_router

api_router = APIRouter()

# 订单与明细
api_router.include_router(orders_router, prefix="/orders", tags=["订单管理"])
api_router.include_router(order_items.router, prefix="/order-items", tags=["订单明细"])

# 仓储与运输
api_router.include_router(inventory.router, prefix="/inventory", tags=["库存管理"])
api_router.include_router(warehouses.router, prefix="/warehouses", tags=["仓库管理"])
api_router.include_router(trucks.router, prefix="/trucks", tags=["货车管理"])

# 登记表
api_router.include_router(counterparties.router, prefix="/counterparties", tags=["客商管理"])
api_router.include_router(archive.router, prefix="/archive", tags=["档案"])

# 查询
api_router.include_router(history.router, prefix="/history", tags=["变更历史"])
api_router.include_router(tracking.router, prefix="/tracking", tags=["客户查询"])
api_router.include_router(search.router, prefix="/search", tags=["全局搜索"])
