"""Core package"""

from .server import DashboardServer

__all__ = ['DashboardServer']
