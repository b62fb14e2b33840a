"""
订单模块公共部分 - 响应构建
"""

from logistics.models.order import Order
from logistics.models.order_item import OrderItem
from logistics.schemas.order import OrderResponse
from logistics.schemas.order_item import OrderItemResponse


def build_item_response(item: OrderItem) -> OrderItemResponse:
    """构建明细响应"""
    return OrderItemResponse.model_validate(item)


def build_order_response(order: Order, with_items: bool = True) -> OrderResponse:
    """构建订单响应（关联需已通过 services.orders.load_order 预加载）"""
    items = sorted(order.items, key=lambda i: i.id) if with_items else []
    return OrderResponse(
        id=order.id,
        name=order.name,
        code=order.code,
        counterparty_id=order.counterparty_id,
        counterparty_name=order.counterparty.name if order.counterparty else "",
        status=order.status,
        status_display=order.status_display,
        warehouse=order.warehouse,
        destination=order.destination,
        expected_delivery=order.expected_delivery,
        comments=order.comments,
        total_amount=order.total_amount,
        paid_amount=order.paid_amount,
        unpaid_amount=order.unpaid_amount,
        total_quantity=order.total_quantity,
        total_weight=order.total_weight,
        total_volume=order.total_volume,
        created_by=order.created_by,
        created_at=order.created_at,
        updated_at=order.updated_at,
        items=[build_item_response(item) for item in items])
