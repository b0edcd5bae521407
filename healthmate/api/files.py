from fastapi import APIRouter, Depends, HTTPException

from healthmate.api.deps import get_current_user, get_store
from healthmate.api.insights import file_to_read
from healthmate.models import User
from healthmate.schemas import FileCreate, FileRead
from healthmate.services.insight_store import InsightStore

router = APIRouter(prefix="/api/files", tags=["files"])

ALLOWED_FILE_TYPES = {"application/pdf", "image/jpeg", "image/png"}


@router.get("", response_model=list[FileRead])
@router.get("/", response_model=list[FileRead], include_in_schema=False)
def list_files(
    user: User = Depends(get_current_user),
    store: InsightStore = Depends(get_store),
):
    """Files of the logged-in user, newest first."""
    return [file_to_read(f) for f in store.list_files(user.id or 0)]


@router.post("", response_model=FileRead)
def register_file(
    body: FileCreate,
    user: User = Depends(get_current_user),
    store: InsightStore = Depends(get_store),
):
    """Records a document that the client already uploaded to Cloudinary."""
    if not body.file_url.startswith(("https://", "http://")):
        raise HTTPException(status_code=400, detail="fileUrl must be an http(s) URL.")
    if body.file_type and body.file_type not in ALLOWED_FILE_TYPES:
        raise HTTPException(status_code=400, detail="Only PDF, JPG or PNG files are supported.")
    f = store.create_file(user.id or 0, body.filename, body.file_url, body.file_type)
    return file_to_read(f)
