"""Organization and user profile repositories."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from signoff.db.models.org import OrgRow
from signoff.db.models.user import UserRow
from signoff.repositories.base import BaseRepository


class OrgRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, OrgRow)

    async def get(self, org_id: str) -> OrgRow | None:
        stmt = select(OrgRow).where(OrgRow.org_id == org_id)
        result = await self.execute(stmt)
        return result.scalar_one_or_none()


class UserRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, UserRow)

    async def get_profile(self, user_id: str) -> UserRow | None:
        """Look up a profile by user id; used to resolve the caller's org."""
        stmt = select(UserRow).where(UserRow.user_id == user_id)
        result = await self.execute(stmt)
        return result.scalar_one_or_none()
