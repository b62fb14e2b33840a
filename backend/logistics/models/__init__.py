# models包初始化文件
# 导入全部模型，保证 Base.metadata 能建出所有表

from logistics.models.admin_user import AdminUser
from logistics.models.counterparty import Counterparty
from logistics.models.warehouse import Warehouse
from logistics.models.warehouse_inventory import WarehouseInventory
from logistics.models.truck import Truck
from logistics.models.order import Order, CustomerTracking
from logistics.models.order_item import OrderItem
from logistics.models.change_history import ChangeHistory
from logistics.models.archive import ArchiveFolder, ArchiveMaterial
from logistics.models.enums import ItemStatus, VolumeType, OrderStatus, TruckStatus

__all__ = [
    "AdminUser",
    "Counterparty",
    "Warehouse",
    "WarehouseInventory",
    "Truck",
    "Order",
    "CustomerTracking",
    "OrderItem",
    "ChangeHistory",
    "ArchiveFolder",
    "ArchiveMaterial",
    "ItemStatus",
    "VolumeType",
    "OrderStatus",
    "TruckStatus",
]
