from abc import ABC, abstractmethod


class INotificationService(ABC):
    """Operator notification channel - application layer"""

    @abstractmethod
    async def send_admin_alert(self, message: str) -> None:
        """Informational alert for administrators"""
        pass

    @abstractmethod
    async def send_system_alert(self, message: str) -> None:
        """Failure alert for on-call"""
        pass
