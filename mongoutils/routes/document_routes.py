from fastapi import APIRouter, Depends, status
from typing import List

from mongoutils.config.database import MongoConnection, get_connection
from mongoutils.schemas.document import (
    DocumentListResponse,
    DocumentResponse,
    HealthResponse,
    SortDirective,
)
from mongoutils.services import provider
from mongoutils.services.document_service import DocumentService
from mongoutils.utils.query_params import SortSpec, get_limit, get_sort

router = APIRouter(
    prefix="/collections",
    tags=["documents"]
)

health_router = APIRouter(tags=["health"])


@router.get("/{collection}/documents", response_model=DocumentListResponse)
def list_documents(
    collection: str,
    limit: int = Depends(get_limit),
    sort: List[SortSpec] = Depends(get_sort),
    document_service: DocumentService = Depends(provider.get_document_service)
):
    """
    List documents of a collection.

    `count` is the number of documents returned, `total` the number in the
    collection.

    `limit` defaults to 5, "none" or "all" returns everything.
    `sort` takes comma separated fields, e.g. `birthday,-username`.
    """
    items = document_service.list_documents(collection, limit=limit, sort=sort)
    return DocumentListResponse(
        collection=collection,
        count=len(items),
        total=document_service.count_documents(collection),
        limit=limit,
        sort=[SortDirective.from_spec(spec) for spec in sort],
        items=items,
    )


@router.get("/{collection}/documents/{document_id}", response_model=DocumentResponse)
def get_document(
    collection: str,
    document_id: str,
    document_service: DocumentService = Depends(provider.get_document_service)
):
    """
    Get a specific document by its ID.
    """
    return document_service.get_document(collection, document_id)


@router.delete("/{collection}/documents/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_document(
    collection: str,
    document_id: str,
    document_service: DocumentService = Depends(provider.get_document_service)
):
    """
    Delete a document.
    """
    document_service.delete_document(collection, document_id)
    return None


@health_router.get("/health", response_model=HealthResponse)
def health(connection: MongoConnection = Depends(get_connection)):
    """
    Ping the database.
    """
    connection.ping()
    return HealthResponse(ok=True, database=connection.config.database_name)
