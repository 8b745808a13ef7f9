"""
Domino Mosaic Service
Exposes the domino converter over HTTP via FastAPI
"""

import base64
import logging
import time
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from .config import HOST, LOG_LEVEL, MAX_UPLOAD_BYTES, OUTPUT_MEDIA_TYPE, PORT
from .errors import ConvertError
from .pipeline import convert

logger = logging.getLogger(__name__)

WHITE_COUNT_HEADER = "X-White-Count"
BLACK_COUNT_HEADER = "X-Black-Count"

app = FastAPI(title="Domino Mosaic Service", version="1.0.0")

# Enable CORS for browser uploads
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["OPTIONS", "POST"],
    allow_headers=["Content-Type"],
    expose_headers=[WHITE_COUNT_HEADER, BLACK_COUNT_HEADER],
)


class ConvertMapResponse(BaseModel):
    success: bool
    error: Optional[str] = None
    kind: Optional[str] = None

    # Mosaic image (base64 JPEG)
    image: Optional[str] = None

    # Row-by-row runs, e.g. [["3b", "2w"], ["5w"]]
    domino_map: List[List[str]] = []

    # Parts list
    white_count: int = 0
    black_count: int = 0

    # Timing
    extraction_ms: int = 0


@app.exception_handler(ConvertError)
async def convert_error_handler(request: Request, exc: ConvertError):
    if exc.is_client_error:
        logger.warning(f"Rejected {request.url.path}: {exc.kind}: {exc.message}")
        status_code = 400
    else:
        logger.error(f"Conversion failed on {request.url.path}: {exc.kind}: {exc.message}")
        status_code = 500
    return JSONResponse(status_code=status_code, content=exc.to_dict())


async def read_upload(request: Request, limit: Optional[int] = None) -> bytes:
    """
    Read the raw request body, refusing anything larger than limit bytes.
    Defaults to MAX_UPLOAD_BYTES.

    Raises:
        HTTPException: 413 once the body exceeds the limit.
    """
    if limit is None:
        limit = MAX_UPLOAD_BYTES

    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise HTTPException(status_code=413, detail=f"Upload exceeds {limit} bytes")

    chunks = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise HTTPException(status_code=413, detail=f"Upload exceeds {limit} bytes")
        chunks.append(chunk)

    return b"".join(chunks)


@app.post("/convert")
async def convert_image(
    request: Request,
    board_width: int = Query(..., description="Board columns in dominoes"),
    board_height: int = Query(..., description="Board rows in dominoes"),
):
    """
    Convert an uploaded image into a domino mosaic.
    Body is the raw image; the response body is the JPEG mosaic with the
    parts list in the X-White-Count / X-Black-Count headers.
    """
    data = await read_upload(request)
    result = await run_in_threadpool(convert, data, (board_width, board_height))

    logger.info(
        f"Converted {len(data)} byte upload to {board_width}x{board_height} board "
        f"({result.white_count} white, {result.black_count} black)"
    )

    return Response(
        content=result.image_bytes,
        media_type=OUTPUT_MEDIA_TYPE,
        headers={
            WHITE_COUNT_HEADER: str(result.white_count),
            BLACK_COUNT_HEADER: str(result.black_count),
        },
    )


@app.options("/convert")
async def convert_preflight():
    return Response(
        status_code=200,
        headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": "OPTIONS, POST",
            "Access-Control-Allow-Headers": "Content-Type",
        },
    )


@app.post("/convert-map", response_model=ConvertMapResponse)
async def convert_map(
    request: Request,
    board_width: int = Query(..., description="Board columns in dominoes"),
    board_height: int = Query(..., description="Board rows in dominoes"),
):
    """
    Convert an uploaded image and return the domino map as JSON.
    Includes the mosaic as base64 so a client can show the layout next to
    the image.
    """
    start = time.time()
    data = await read_upload(request)

    try:
        result = await run_in_threadpool(convert, data, (board_width, board_height))
    except ConvertError as e:
        log = logger.warning if e.is_client_error else logger.error
        log(f"Map conversion failed: {e.kind}: {e.message}")
        return ConvertMapResponse(
            success=False,
            error=e.message,
            kind=e.kind,
            extraction_ms=int((time.time() - start) * 1000)
        )

    return ConvertMapResponse(
        success=True,
        image=base64.b64encode(result.image_bytes).decode("utf-8"),
        domino_map=[list(row) for row in result.domino_map],
        white_count=result.white_count,
        black_count=result.black_count,
        extraction_ms=int((time.time() - start) * 1000)
    )


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "domino-mosaic"}


def run() -> None:
    """Launch the service with uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
