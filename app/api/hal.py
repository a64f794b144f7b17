"""HAL+JSON responses."""

from typing import Dict, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel

HAL_JSON = "application/hal+json"


class HALJSONResponse(JSONResponse):
    media_type = HAL_JSON


def hal_response(
    model: BaseModel,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
) -> HALJSONResponse:
    """Serialize a representation with its ``_links``/``_embedded`` aliases."""
    return HALJSONResponse(
        content=model.model_dump(mode="json", by_alias=True),
        status_code=status_code,
        headers=headers,
    )
