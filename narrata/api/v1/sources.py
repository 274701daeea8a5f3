"""
Source (uploaded document) API routes
"""
from datetime import datetime, timezone

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from narrata.core.database import get_db
from narrata.core.response import (
    success_response,
    paged_response,
    ResponseModel,
    PagedResponseModel,
    MessageResponse,
)
from narrata.core.exceptions import BadRequestException, NotFoundException
from narrata.core.security import CurrentUser, get_current_user
from narrata.crud import source_crud
from narrata.models.source import SourceType, SourceResponse, SourceListResponse
from narrata.schemas.sources import ManualTextRequest, UploadResponse
from narrata.services.uploads import (
    UploadResult,
    UploadService,
    get_upload_service,
    process_source_in_background,
)

router = APIRouter()

DUPLICATE_MESSAGES = {
    SourceType.RESUME.value: "Resume already processed — using saved data.",
    SourceType.COVER_LETTER.value: "Cover letter already processed — using saved data.",
}


async def _handle_upload(
    *,
    db: AsyncSession,
    service: UploadService,
    background_tasks: BackgroundTasks,
    user: CurrentUser,
    kind: SourceType,
    data: bytes,
    file_name: str,
    content_type: str,
    manual: bool,
) -> dict:
    """Validate, record, then process now or after the response"""
    created = await service.create_source(
        db,
        user_id=user.id,
        kind=kind,
        data=data,
        file_name=file_name,
        content_type=content_type,
        manual=manual,
    )
    if not created.success:
        raise BadRequestException(created.error, data={"retryable": created.retryable})

    if created.duplicate:
        return _upload_payload(created, DUPLICATE_MESSAGES[created.source.source_type])

    if service.should_defer(len(data)):
        # Commit now so the background session can see the row
        await db.commit()
        background_tasks.add_task(
            process_source_in_background, service, created.source.id, user.id, data, manual
        )
        return _upload_payload(created, "Upload received, processing in background", deferred=True)

    storage_path = created.source.storage_path
    try:
        result = await service.process(db, created.source, data, manual=manual)
    except Exception:
        # The row is rolled back with the request; do not leave the file behind
        service.remove_file(storage_path)
        raise
    message = "Upload processed" if result.success else result.error
    return _upload_payload(result, message)


def _upload_payload(result: UploadResult, message: str, deferred: bool = False) -> dict:
    payload = UploadResponse(
        source=SourceListResponse.model_validate(result.source),
        duplicate=result.duplicate,
        deferred=deferred,
        imported=result.imported,
        error=result.error,
        retryable=result.retryable,
    )
    return success_response(data=payload.model_dump(), message=message)


@router.post("/upload", summary="Upload a document", response_model=ResponseModel[UploadResponse])
async def upload_source(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(..., description="PDF, DOCX, TXT or MD file"),
    kind: SourceType = Form(SourceType.RESUME, description="resume or cover_letter"),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    service: UploadService = Depends(get_upload_service),
):
    """
    Upload a resume or cover letter

    Small files are processed before responding; large ones in the background.
    Processing failures are reported on the source (processing_error).
    """
    data = await file.read()
    return await _handle_upload(
        db=db,
        service=service,
        background_tasks=background_tasks,
        user=user,
        kind=kind,
        data=data,
        file_name=file.filename or "upload",
        content_type=file.content_type,
        manual=False,
    )


@router.post("/text", summary="Submit pasted text", response_model=ResponseModel[UploadResponse])
async def submit_text(
    request: ManualTextRequest,
    background_tasks: BackgroundTasks,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    service: UploadService = Depends(get_upload_service),
):
    kind = SourceType(request.kind)
    millis = int(datetime.now(timezone.utc).timestamp() * 1000)
    return await _handle_upload(
        db=db,
        service=service,
        background_tasks=background_tasks,
        user=user,
        kind=kind,
        data=request.text.encode("utf-8"),
        file_name=f"manual_{kind.value}_{millis}.txt",
        content_type="text/plain",
        manual=True,
    )


@router.get("", summary="List sources", response_model=PagedResponseModel[SourceListResponse])
async def get_sources(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Page size"),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    skip = (page - 1) * page_size
    sources = await source_crud.get_multi(db, user_id=user.id, skip=skip, limit=page_size)
    total = await source_crud.count(db, user_id=user.id)
    return paged_response(sources, total, page, page_size, schema=SourceListResponse)


@router.get("/{source_id}", summary="Get source", response_model=ResponseModel[SourceResponse])
async def get_source(
    source_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    source = await source_crud.get(db, source_id, user_id=user.id)
    if not source:
        raise NotFoundException(f"Source not found: {source_id}")
    return success_response(data=SourceResponse.model_validate(source).model_dump())


@router.delete("/{source_id}", summary="Delete source", response_model=MessageResponse)
async def delete_source(
    source_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    service: UploadService = Depends(get_upload_service),
):
    """
    Delete a source and its stored file; imported work history is kept
    """
    source = await source_crud.get(db, source_id, user_id=user.id)
    if not source:
        raise NotFoundException(f"Source not found: {source_id}")

    storage_path = source.storage_path
    await source_crud.delete(db, id=source_id, user_id=user.id)
    service.remove_file(storage_path)
    return success_response(message="Source deleted")
