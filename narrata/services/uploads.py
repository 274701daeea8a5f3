"""
Document uploads

Validates resume / cover letter files (or pasted text), records them as
sources, and runs extraction -> LLM analysis -> work history import.
"""
import hashlib
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from narrata.core.config import settings
from narrata.core.database import AsyncSessionLocal
from narrata.crud import source_crud
from narrata.models.source import Source, SourceType, ProcessingStatus
from .resume_analyzer import ResumeAnalyzer
from .text_extraction import PDF_TYPE, DOCX_TYPE, extract_text
from .work_history_import import import_structured_data

TXT_TYPE = "text/plain"
MD_TYPE = "text/markdown"


class UploadKind(str, Enum):
    """What an uploaded document is"""
    RESUME = "resume"
    COVER_LETTER = "cover_letter"
    CASE_STUDIES = "case_studies"


ALLOWED_TYPES = {
    UploadKind.RESUME: (PDF_TYPE, DOCX_TYPE, TXT_TYPE, MD_TYPE),
    UploadKind.COVER_LETTER: (TXT_TYPE, PDF_TYPE, MD_TYPE, DOCX_TYPE),
    UploadKind.CASE_STUDIES: (TXT_TYPE, PDF_TYPE, MD_TYPE),
}

EXTENSION_TYPES = {
    ".pdf": PDF_TYPE,
    ".docx": DOCX_TYPE,
    ".txt": TXT_TYPE,
    ".md": MD_TYPE,
}

FILE_TOO_LARGE = "File is too large. Please upload a file smaller than 5MB."
INVALID_TYPE = "Please upload a supported file type (PDF, DOCX, TXT, or MD)."

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


@dataclass
class FileValidationResult:
    valid: bool
    error: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = None


@dataclass
class UploadResult:
    """Outcome of an upload"""
    success: bool
    source: Optional[Source] = None
    duplicate: bool = False
    error: Optional[str] = None
    retryable: bool = False
    imported: Dict[str, int] = field(default_factory=dict)


def resolve_content_type(file_name: str, content_type: Optional[str]) -> Optional[str]:
    """Browsers often send octet-stream for .md / .docx; fall back to the extension"""
    content_type = (content_type or "").split(";")[0].strip().lower()
    if content_type in EXTENSION_TYPES.values():
        return content_type
    return EXTENSION_TYPES.get(Path(file_name or "").suffix.lower(), content_type or None)


def validate_file(
    file_name: str,
    content_type: Optional[str],
    size: int,
    kind: UploadKind = UploadKind.RESUME,
) -> FileValidationResult:
    """Check size and type against the limits for the upload kind"""
    if size > settings.max_upload_size:
        return FileValidationResult(valid=False, error=FILE_TOO_LARGE)

    file_type = resolve_content_type(file_name, content_type)
    if file_type not in ALLOWED_TYPES[UploadKind(kind)]:
        return FileValidationResult(valid=False, error=INVALID_TYPE)

    return FileValidationResult(valid=True, file_type=file_type, file_size=size)


def compute_checksum(data: bytes) -> str:
    """SHA-256 hex digest"""
    return hashlib.sha256(data).hexdigest()


def build_storage_path(user_id: str, file_name: str, now: Optional[datetime] = None) -> str:
    """user_id/YYYY/MM/DD/<millis>_<sanitized name>"""
    now = now or datetime.now(timezone.utc)
    sanitized = _UNSAFE_CHARS.sub("_", file_name)
    millis = int(now.timestamp() * 1000)
    return f"{user_id}/{now:%Y}/{now:%m}/{now:%d}/{millis}_{sanitized}"


def build_manual_path(user_id: str, kind: str, now: Optional[datetime] = None) -> str:
    """Virtual storage path for pasted text"""
    now = now or datetime.now(timezone.utc)
    return f"manual/{user_id}/{kind}/{int(now.timestamp() * 1000)}.txt"


def is_manual_path(storage_path: str) -> bool:
    return storage_path.startswith("manual/")


class UploadService:
    """
    Upload pipeline

    Files land under settings.upload_dir at their storage path; pasted text
    is never written to disk.
    """

    def __init__(
        self,
        analyzer: Optional[ResumeAnalyzer] = None,
        upload_dir: Optional[str] = None,
        session_factory: Optional[async_sessionmaker] = None,
    ):
        self.analyzer = analyzer or ResumeAnalyzer()
        self.upload_dir = Path(upload_dir or settings.upload_dir)
        # Background processing opens its own sessions
        self.session_factory = session_factory or AsyncSessionLocal

    def _store_file(self, storage_path: str, data: bytes) -> None:
        target = self.upload_dir / storage_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    def remove_file(self, storage_path: str) -> None:
        """Remove a stored upload; missing files are ignored"""
        if is_manual_path(storage_path):
            return
        target = self.upload_dir / storage_path
        try:
            target.unlink()
        except FileNotFoundError:
            logger.warning("Stored file already gone: {}", storage_path)

    async def create_source(
        self,
        db: AsyncSession,
        *,
        user_id: str,
        kind: SourceType,
        data: bytes,
        file_name: str,
        content_type: Optional[str],
        manual: bool = False,
    ) -> UploadResult:
        """
        Validate and record an upload

        Returns the existing source (duplicate=True) when the same content
        was already processed for this user.
        """
        kind = SourceType(kind)
        validation = validate_file(file_name, content_type, len(data), UploadKind(kind.value))
        if not validation.valid:
            logger.warning("Upload rejected for user {}: {}", user_id, validation.error)
            return UploadResult(success=False, error=validation.error, retryable=False)

        checksum = compute_checksum(data)
        existing = await source_crud.get_completed_by_checksum(db, checksum, user_id=user_id)
        if existing:
            logger.info("Duplicate {} upload for user {}, reusing source {}", kind.value, user_id, existing.id)
            return UploadResult(success=True, source=existing, duplicate=True)

        if manual:
            storage_path = build_manual_path(user_id, kind.value)
        else:
            storage_path = build_storage_path(user_id, file_name)
            try:
                self._store_file(storage_path, data)
            except OSError as e:
                logger.error("Storing upload failed: {}", e)
                return UploadResult(
                    success=False,
                    error="Upload failed. Please check your connection and try again.",
                    retryable=True,
                )

        source = await source_crud.create(
            db,
            obj_in={
                "file_name": file_name,
                "file_type": validation.file_type,
                "file_size": len(data),
                "file_checksum": checksum,
                "storage_path": storage_path,
                "source_type": kind.value,
                "processing_status": ProcessingStatus.PENDING.value,
            },
            user_id=user_id,
        )
        return UploadResult(success=True, source=source)

    async def process(
        self,
        db: AsyncSession,
        source: Source,
        data: bytes,
        *,
        manual: bool = False,
    ) -> UploadResult:
        """
        Extract, analyze and import one source

        The source finishes as completed, or failed with processing_error.
        """
        source_id = source.id
        await source_crud.set_status(db, db_obj=source, status=ProcessingStatus.PROCESSING)
        try:
            if manual:
                text = data.decode("utf-8", errors="replace")
            else:
                extraction = extract_text(data, source.file_type)
                if not extraction.success:
                    raise ValueError(f"Text extraction failed: {extraction.error}")
                text = extraction.text or ""
            source.raw_text = text
            await source_crud.set_status(db, db_obj=source, status=ProcessingStatus.PROCESSING)

            analysis = await self.analyzer.analyze(text, source.source_type)
            if not analysis.success:
                return await self._fail(
                    db, source, f"LLM analysis failed: {analysis.error}", analysis.retryable
                )

            structured: Dict[str, Any] = analysis.data or {}
            source.structured_data = structured
            await db.flush()

            imported: Dict[str, int] = {}
            if source.source_type == SourceType.RESUME.value or structured.get("workHistory"):
                # Partial imports are rolled back with the savepoint
                async with db.begin_nested():
                    imported = await import_structured_data(db, source.user_id, structured, source.id)
        except ValueError as e:
            return await self._fail(db, source, str(e), retryable=False)
        except Exception as e:
            logger.exception("Unexpected error processing source {}", source_id)
            return await self._fail(db, source, f"Processing failed: {e}", retryable=True)

        await source_crud.set_status(db, db_obj=source, status=ProcessingStatus.COMPLETED)
        logger.info("Source {} processed ({})", source.id, source.source_type)
        return UploadResult(success=True, source=source, imported=imported)

    async def _fail(self, db: AsyncSession, source: Source, error: str, retryable: bool) -> UploadResult:
        await source_crud.set_status(db, db_obj=source, status=ProcessingStatus.FAILED, error=error)
        await db.refresh(source)
        logger.error("Processing source {} failed: {}", source.id, error)
        return UploadResult(success=False, source=source, error=error, retryable=retryable)

    async def upload(
        self,
        db: AsyncSession,
        *,
        user_id: str,
        kind: SourceType,
        data: bytes,
        file_name: str,
        content_type: Optional[str],
        manual: bool = False,
    ) -> UploadResult:
        """Create the source and process it in the same session"""
        result = await self.create_source(
            db,
            user_id=user_id,
            kind=kind,
            data=data,
            file_name=file_name,
            content_type=content_type,
            manual=manual,
        )
        if not result.success or result.duplicate:
            return result
        return await self.process(db, result.source, data, manual=manual)

    def should_defer(self, size: int) -> bool:
        """Large content is processed after the response is sent"""
        return size >= settings.immediate_processing_threshold


async def process_source_in_background(
    service: UploadService,
    source_id: str,
    user_id: str,
    data: bytes,
    manual: bool = False,
) -> None:
    """Background task body; opens its own session"""
    async with service.session_factory() as db:
        source = await source_crud.get(db, source_id, user_id=user_id)
        if source is None:
            logger.warning("Background processing skipped, source {} is gone", source_id)
            return
        try:
            await service.process(db, source, data, manual=manual)
            await db.commit()
        except Exception:
            await db.rollback()
            logger.exception("Background processing of source {} crashed", source_id)


def get_upload_service() -> UploadService:
    return UploadService()
