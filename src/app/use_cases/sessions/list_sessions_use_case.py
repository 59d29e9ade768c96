"""
List Sessions Use Case

Lists a user's live device sessions.
"""

from typing import List
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import SessionSnapshot


class ListSessionsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[List[SessionSnapshot]]:
        async with self.uow:
            sessions = await self.uow.sessions.list_user_sessions(user_id)
            return Return.ok([SessionSnapshot.model_validate(s) for s in sessions])
