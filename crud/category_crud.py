from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Category


class CategoryCrud:

    def __init__(self):
        self.table = Category

    async def get_category_by_id(self, session: AsyncSession, category_id: int) -> Optional[Category]:
        stmt = select(Category).where(Category.id == category_id)
        result = await session.execute(stmt)
        return result.scalars().first()


category_crud = CategoryCrud()
