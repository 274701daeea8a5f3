"""
Cover letter and template CRUD
"""
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from narrata.models.cover_letter import CoverLetter, CoverLetterTemplate
from .base import CRUDBase


class CRUDCoverLetterTemplate(CRUDBase[CoverLetterTemplate]):
    """Template CRUD"""

    async def is_in_use(self, db: AsyncSession, id: str) -> bool:
        """Whether any cover letter references the template"""
        result = await db.execute(
            select(func.count()).select_from(CoverLetter).where(CoverLetter.template_id == id)
        )
        return (result.scalar() or 0) > 0


class CRUDCoverLetter(CRUDBase[CoverLetter]):
    """Cover letter CRUD"""

    async def count_by_job_description(self, db: AsyncSession, job_description_id: str) -> int:
        result = await db.execute(
            select(func.count()).select_from(CoverLetter)
            .where(CoverLetter.job_description_id == job_description_id)
        )
        return result.scalar() or 0


cover_letter_template_crud = CRUDCoverLetterTemplate(CoverLetterTemplate)
cover_letter_crud = CRUDCoverLetter(CoverLetter)
