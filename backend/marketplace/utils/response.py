from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success(data=None, message: str = "Success", code: int = 200, meta=None) -> JSONResponse:
    return JSONResponse(
        status_code=code,
        content=jsonable_encoder({
            "success": True,
            "code": code,
            "message": message,
            "data": data,
            "meta": meta,
        }),
    )
