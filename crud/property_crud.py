from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Property


class PropertyCrud:

    def __init__(self):
        self.table = Property

    async def get_property_by_id(self, session: AsyncSession, property_id: int) -> Optional[Property]:
        stmt = select(Property).where(Property.id == property_id)
        result = await session.execute(stmt)
        return result.scalars().first()


property_crud = PropertyCrud()
