"""Common infrastructure schemas."""

from bloomcrux.infrastructure.common.schemas.response_wrappers import SuccessResponse

__all__ = ["SuccessResponse"]
