"""
Services module for mongoutils.

This module contains the business logic services used by the routes.
"""

from .document_service import DocumentService
from .dependency_provider_service import DependencyProviderService

__all__ = [
    "DocumentService",
    "DependencyProviderService",
]

# All methods are static, so we export the class directly
provider = DependencyProviderService
