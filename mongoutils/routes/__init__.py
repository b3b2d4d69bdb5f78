from mongoutils.routes.document_routes import router as document_controller
from mongoutils.routes.document_routes import health_router as health_controller


__all__ = [
    'document_controller',
    'health_controller',
]
