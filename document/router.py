from typing import List
from fastapi import APIRouter, Depends, File, UploadFile

from auth.services.auth_service import get_current_active_user
from .schema import UploadResult
from document import service

document_router = APIRouter(prefix="/documents", tags=["Documents"])

@document_router.post("", response_model=UploadResult)
def upload_documents(
    documents: List[UploadFile] = File(..., description="Up to 5 files, 5MB each"),
    _user = Depends(get_current_active_user),
):
    return UploadResult(documents=service.store_documents(documents))
