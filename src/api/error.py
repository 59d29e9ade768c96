from fastapi import status
from libs.result import Error


class ClientError(Exception):
    """Business error the caller can act on; rendered with its code and message"""

    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)

    def to_dict(self) -> dict:
        error = {"code": self.base_error.code, "message": self.base_error.message}
        if self.base_error.details:
            error["details"] = self.base_error.details
        return error


class ServerError(Exception):
    """Failure whose message stays server-side; clients get a generic 500"""

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)

    def to_dict(self) -> dict:
        return {"code": self.base_error.code, "message": "Internal server error"}
