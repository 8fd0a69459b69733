from pydantic import BaseModel


class DeleteResponse(BaseModel):
    """
    Returned when a delete succeeded
    """

    success: bool


class ErrorResponse(BaseModel):
    """
    Body of an HTTPException response, documented for 404s in OpenAPI
    """

    detail: str
