"""
Register Use Case

Creates a catalog user account.
"""

import asyncio

import bcrypt

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from .dtos import RegisterCommand, RegisterResponse
from .errors import EMAIL_ALREADY_EXISTS


class RegisterUseCase:
    """
    Use case for user registration.

    Business Rules:
    - Email must be unique (case-insensitive)
    - Password stored as bcrypt hash (cost factor 12)
    - Response never includes the password hash
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        email = command.email.strip().lower()

        async with self.uow:
            existing = await self.uow.users.get_by_email(email)
            if existing is not None:
                return Return.err(Error(EMAIL_ALREADY_EXISTS, "Email already exists"))

            password_hash = await asyncio.to_thread(
                bcrypt.hashpw, command.password.encode(), bcrypt.gensalt(12)
            )

            user = User(
                email=email,
                password_hash=password_hash.decode(),
                first_name=command.first_name,
                last_name=command.last_name,
            )
            user = await self.uow.users.create(user)
            await self.uow.commit()

            return Return.ok(
                RegisterResponse(
                    id=str(user.id),
                    email=user.email,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    role=user.role.value,
                    created_at=user.created_at,
                )
            )
