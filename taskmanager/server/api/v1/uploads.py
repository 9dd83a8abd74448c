"""
API endpoints for document uploads.
"""

from fastapi import APIRouter, File, UploadFile, status

from taskmanager.core.models.io import DocumentUploadRead
from taskmanager.server.services.deps import CurrentUserDep
from taskmanager.server.services.uploads import store_document

router = APIRouter(tags=["uploads"])


@router.post(
    "/documents",
    response_model=DocumentUploadRead,
    status_code=status.HTTP_201_CREATED,
    summary="Upload Document",
    description="Store a .doc or .docx file (up to the configured size) under a generated name.",
    response_description="The stored file name, the original name and the size in bytes.",
    responses={
        201: {"description": "Document stored"},
        400: {"description": "Rejected upload"},
        401: {"description": "Please authenticate."},
    },
)
async def upload_document(user: CurrentUserDep, upload: UploadFile = File(...)) -> DocumentUploadRead:
    return await store_document(upload)
