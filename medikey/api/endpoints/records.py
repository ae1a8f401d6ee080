import base64
import binascii
import json
import logging
from datetime import datetime
from typing import Any, List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from medikey import crud, models, schemas
from medikey.api import deps
from medikey.core.config import settings
from medikey.crud.medical_record import RECENT_PER_PAGE
from medikey.utils import openai_client
from medikey.utils.timezone import to_utc_naive

logger = logging.getLogger(__name__)

router = APIRouter()

TEXT_MIME_TYPES = ("application/json", "application/xml", "application/csv")


def content_disposition(file_name: str, disposition: str = "inline") -> str:
    """Header value for a stored file name; non-ASCII names go in filename*"""
    encoded = quote(file_name)
    if encoded == file_name:
        return f'{disposition}; filename="{file_name}"'
    fallback = file_name.encode("ascii", "ignore").decode().replace('"', "").replace("\\", "").strip() or "download"
    return f"{disposition}; filename=\"{fallback}\"; filename*=utf-8''{encoded}"


def parse_tags(raw: Optional[str]) -> List[str]:
    """Tags arrive as a JSON array or as comma-separated text"""
    if not raw or not raw.strip():
        return []
    try:
        parsed = json.loads(raw)
    except ValueError:
        parsed = None
    if isinstance(parsed, list):
        return [str(tag).strip() for tag in parsed if str(tag).strip()]
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def document_text(record: models.MedicalRecord) -> str:
    """Text handed to the AI helpers: the file itself when readable, else the metadata"""
    if record.file_type.startswith("text/") or record.file_type in TEXT_MIME_TYPES:
        try:
            return base64.b64decode(record.file_content).decode("utf-8", errors="replace")
        except (binascii.Error, ValueError) as e:
            logger.warning(f"Could not decode file of record {record.id}: {e}")
    lines = [
        f"Title: {record.title}",
        f"Type: {record.record_type}",
        f"Date: {record.record_date.date().isoformat()}",
    ]
    if record.provider:
        lines.append(f"Provider: {record.provider}")
    if record.description:
        lines.append(f"Description: {record.description}")
    if record.tags:
        lines.append(f"Tags: {', '.join(record.tags)}")
    return "\n".join(lines)


@router.get("/", response_model=List[schemas.MedicalRecordSummary])
def read_records(
    db: Session = Depends(deps.get_db),
    record_type: Optional[str] = Query(None, alias="recordType"),
    tag: Optional[str] = None,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    """
    Retrieve the current user's records, newest first.
    """
    return crud.medical_record.get_by_user(db, user_id=current_user.id, record_type=record_type, tag=tag)


@router.get("/recent", response_model=schemas.RecentRecordsPage)
def read_recent_records(
    db: Session = Depends(deps.get_db),
    page: int = 1,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    page = max(page, 1)
    records, total = crud.medical_record.get_recent(db, user_id=current_user.id, page=page)
    return {"records": records, "total": total, "per_page": RECENT_PER_PAGE, "page": page}


@router.post("/", response_model=schemas.MedicalRecordSummary, status_code=status.HTTP_201_CREATED)
async def create_record(
    db: Session = Depends(deps.get_db),
    title: str = Form(...),
    record_type: str = Form(..., alias="recordType"),
    record_date: datetime = Form(..., alias="recordDate"),
    description: Optional[str] = Form(None),
    provider: Optional[str] = Form(None),
    provider_type: Optional[str] = Form(None, alias="providerType"),
    tags: Optional[str] = Form(None),
    file: UploadFile = File(...),
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    """
    Upload a medical document. The file is stored base64-encoded with its metadata.
    """
    content = await file.read()
    if len(content) > settings.max_upload_size_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds the {settings.MAX_UPLOAD_SIZE_MB}MB upload limit",
        )
    record = crud.medical_record.create_with_owner(
        db,
        obj_in={
            "title": title,
            "description": description,
            "record_type": record_type,
            "provider": provider,
            "provider_type": provider_type,
            "record_date": to_utc_naive(record_date),
            "file_content": base64.b64encode(content).decode("ascii"),
            "file_type": file.content_type or "application/octet-stream",
            "file_name": file.filename or "document",
            "file_size": len(content),
            "tags": parse_tags(tags),
        },
        user_id=current_user.id,
    )
    logger.info(f"User {current_user.id} uploaded record {record.id} ({record.file_size} bytes)")
    return record


@router.get("/{record_id}", response_model=schemas.MedicalRecord)
def read_record(
    *,
    db: Session = Depends(deps.get_db),
    record_id: int,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    return deps.ensure_owner(crud.medical_record.get(db, id=record_id), current_user, "Medical record")


@router.get("/{record_id}/file")
def download_record_file(
    *,
    db: Session = Depends(deps.get_db),
    record_id: int,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    record = deps.ensure_owner(crud.medical_record.get(db, id=record_id), current_user, "Medical record")
    return Response(
        content=base64.b64decode(record.file_content),
        media_type=record.file_type,
        headers={"Content-Disposition": content_disposition(record.file_name)},
    )


@router.delete("/{record_id}", response_model=schemas.Message)
def delete_record(
    *,
    db: Session = Depends(deps.get_db),
    record_id: int,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    record = deps.ensure_owner(crud.medical_record.get(db, id=record_id), current_user, "Medical record")
    crud.medical_record.remove(db, db_obj=record)
    return {"message": "Record deleted successfully"}


@router.get("/{record_id}/summary", response_model=schemas.RecordSummaryResponse)
def read_record_summary(
    *,
    db: Session = Depends(deps.get_db),
    record_id: int,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    record = deps.ensure_owner(crud.medical_record.get(db, id=record_id), current_user, "Medical record")
    return {"summary": record.ai_summary}


@router.post("/{record_id}/generate-summary", response_model=schemas.GenerateSummaryResponse)
async def generate_record_summary(
    *,
    db: Session = Depends(deps.get_db),
    record_id: int,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    record = deps.ensure_owner(crud.medical_record.get(db, id=record_id), current_user, "Medical record")
    try:
        summary = await openai_client.summarize_text(document_text(record))
    except openai_client.AIServiceError as e:
        # The failure text is never stored as the summary
        return {"success": False, "summary": e.message}
    crud.medical_record.set_summary(db, db_obj=record, summary=summary)
    return {"success": True, "summary": summary}


@router.post("/{record_id}/analyze", response_model=schemas.DocumentAnalysis)
async def analyze_record(
    *,
    db: Session = Depends(deps.get_db),
    record_id: int,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    record = deps.ensure_owner(crud.medical_record.get(db, id=record_id), current_user, "Medical record")
    return await openai_client.analyze_medical_document(document_text(record))
