"""
Infrastructure package - Adapters for external systems.
"""

from .http_gateway import HttpCompanyServicesGateway

__all__ = ["HttpCompanyServicesGateway"]
