from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import USER_NOT_FOUND
from src.app.services.unit_of_work import UnitOfWork
from .dtos import UserSummary


class GetCurrentUserUseCase:
    """Load the summary of the user an access token resolved to"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[UserSummary]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error(USER_NOT_FOUND, "User does not exist"))

            # Read before the unit of work rolls back and expires the instance
            return Return.ok(UserSummary.from_user(user))
