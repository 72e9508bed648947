from fastapi import status
from todo_auth.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def error_body(code: str, message: str) -> dict:
    """Uniform failure envelope shared by every error handler"""
    return {"success": False, "error": message, "code": code}
