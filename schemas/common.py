"""
schemas/common.py

- Shared response shapes used across routers (pydantic v2)
  1) Error body: ErrorResponse
  2) Bulk update result: UpdatedCount
"""

from pydantic import BaseModel, Field


# =========================================================
# 1) Error body
# =========================================================

class ErrorResponse(BaseModel):
    """
    Body returned by every error handler in middlewares/error_handler.py
    - registered in router `responses=` so Swagger shows it
    """
    error: str = Field(..., description="human readable message, no internals")


# =========================================================
# 2) Bulk update result
# =========================================================

class UpdatedCount(BaseModel):
    message: str = "Updated successfully"
    updated: int = Field(..., ge=0, description="number of rows changed")


ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}
