"""Document upload and event extraction endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, status
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from src.api.auth import verify_api_key
from src.api.dependencies import get_extraction_service
from src.api.models import (
    ErrorResponse,
    EventItem,
    ExtractionPayload,
    ExtractResponse,
    SavedFile,
    UploadedFileInfo,
)
from src.config.settings import get_settings as _get_settings
from src.observability.logging import get_logger
from src.services.extraction_service import ExtractionResult, ExtractionService

router = APIRouter()
logger = get_logger(__name__)


def _to_response(result: ExtractionResult, file_info: UploadedFileInfo) -> ExtractResponse:
    data = result.event_set.to_dict()
    return ExtractResponse(
        message="Events extracted successfully",
        file=file_info,
        extraction=ExtractionPayload(
            total_pages=result.page_count,
            total_events=data["total_events"],
            events=[EventItem(**e) for e in data["events"]],
            event_types={
                event_type: [EventItem(**e) for e in events]
                for event_type, events in data["event_types"].items()
            },
            metadata=result.metadata,
        ),
        saved_files={
            fmt: SavedFile(**outcome.to_dict())
            for fmt, outcome in result.saved_files.items()
        },
    )



def _too_large(limit: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        detail=f"File exceeds the {limit} byte limit",
    )

@router.post(
    "/extract",
    response_model=ExtractResponse,
    responses={
        400: {"model": ErrorResponse, "description": "No file uploaded"},
        401: {"model": ErrorResponse, "description": "Invalid API key"},
        413: {"model": ErrorResponse, "description": "File too large"},
        415: {"model": ErrorResponse, "description": "Unsupported file type"},
        422: {"model": ErrorResponse, "description": "Text could not be extracted"},
    },
    summary="Extract calendar events from an uploaded document",
    description=(
        "Upload a PDF or text almanac under any form field name. Only the "
        "first file is processed. Events are returned de-duplicated and "
        "sorted by date, and are also written to JSON and CSV files."
    ),
)
async def extract_events(
    request: Request,
    api_key: str = Depends(verify_api_key),
    service: ExtractionService = Depends(get_extraction_service),
) -> ExtractResponse:
    settings = _get_settings()

    form = await request.form()
    uploads = [
        (fieldname, value)
        for fieldname, value in form.multi_items()
        if isinstance(value, UploadFile)
    ]
    if not uploads:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )
    if len(uploads) > 1:
        logger.info("Multiple files uploaded, processing only the first", count=len(uploads))

    fieldname, upload = uploads[0]
    filename = upload.filename or ""
    if not service.loader.is_supported(filename):
        allowed = ", ".join(sorted(settings.allowed_extension_set))
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"Unsupported file type. Allowed: {allowed}",
        )

    # size is known once the form is parsed; reject before reading into memory
    if upload.size is not None and upload.size > settings.max_upload_bytes:
        raise _too_large(settings.max_upload_bytes)
    data = await upload.read()
    if len(data) > settings.max_upload_bytes:
        raise _too_large(settings.max_upload_bytes)

    logger.info(
        "Processing upload",
        original_name=filename,
        size=len(data),
        mimetype=upload.content_type,
        fieldname=fieldname,
    )

    # CPU-bound; keep it off the event loop so the timeout middleware can fire
    result = await run_in_threadpool(service.process_upload, data, filename)

    file_info = UploadedFileInfo(
        original_name=filename,
        size=len(data),
        mimetype=upload.content_type,
        fieldname=fieldname,
    )
    return _to_response(result, file_info)


@router.get("/extract/test", summary="Check that the extract route is reachable")
async def extract_route_test() -> dict:
    return {
        "message": "Extract route is working",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
