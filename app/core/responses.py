from fastapi.responses import JSONResponse


class UTF8JSONResponse(JSONResponse):
    """JSON response that declares its charset, so names and addresses keep their accents."""

    media_type = "application/json; charset=utf-8"
