from pydantic import BaseModel


# Error responses
class ErrorResponse(BaseModel):
    detail: str
    error: str  # exception class name, e.g. "AlreadyBookedError"


class DeletedResponse(BaseModel):
    id: str
    deleted: bool = True
