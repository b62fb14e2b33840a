"""Логистика - 订单、仓库、货车后台"""

__version__ = "1.0.0"
