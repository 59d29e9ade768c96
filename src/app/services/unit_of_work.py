from abc import ABC, abstractmethod

from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """
    One store transaction shared by the credential and session repositories.

    Leaving the ``async with`` block without ``commit()`` discards every
    write. Objects loaded inside the block must not be read after it exits.
    """

    users: IUserRepository
    sessions: ISessionRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc, tb):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
