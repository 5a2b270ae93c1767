from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.user_model import UserModel


class UserCrud:

    def __init__(self):
        self.table = UserModel

    async def user_exists(self, session: AsyncSession, user_id: int) -> bool:
        stmt = select(UserModel.id).where(UserModel.id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None


user_crud = UserCrud()
