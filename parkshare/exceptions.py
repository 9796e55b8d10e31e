from fastapi import HTTPException


class NotFoundError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=404, detail=detail)


class CapacityExceededError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)


class InvalidStateError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)


class ValidationFailureError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)
