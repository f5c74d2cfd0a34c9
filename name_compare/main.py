import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, UploadFile, File, Form, HTTPException, Response

from . import rules
from .compare import SelectionError
from .models import ComparisonResponse, DatasetSummary, HealthResponse
from .reader import ParseError, default_column, extension_of, header_names, read_table
from .session import ComparisonSession, export_results, load_dataset, run_comparison, select_column

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=rules.LOG_LEVEL)
    yield


app = FastAPI(
    lifespan=lifespan,
    title="name-comparator",
    description="Find names missing between two spreadsheets",
    version="0.1.0",
)


async def _read_upload(file: UploadFile) -> bytes:
    if extension_of(file.filename) not in rules.SUPPORTED_EXTENSIONS:
        logger.warning("rejected upload %r: unsupported type", file.filename)
        raise HTTPException(
            status_code=422,
            detail=f"Only {', '.join(rules.SUPPORTED_EXTENSIONS)} files are supported",
        )
    raw = await file.read()
    if len(raw) > rules.MAX_UPLOAD_BYTES:
        logger.warning("rejected upload %r: %s bytes", file.filename, len(raw))
        raise HTTPException(status_code=413, detail=f"{file.filename} is too large")
    return raw


async def _compared_session(
    file1: UploadFile, file2: UploadFile, column1: Optional[str], column2: Optional[str]
) -> ComparisonSession:
    raw1 = await _read_upload(file1)
    raw2 = await _read_upload(file2)
    try:
        session = load_dataset(ComparisonSession(), 1, raw1, file1.filename)
        session = load_dataset(session, 2, raw2, file2.filename)
        if column1:
            session = select_column(session, 1, column1)
        if column2:
            session = select_column(session, 2, column2)
        return run_comparison(session)
    except ParseError as e:
        logger.warning("upload rejected: %s", e)
        raise HTTPException(status_code=422, detail=f"Could not read file: {e}")
    except SelectionError as e:
        logger.warning("comparison rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e))


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/datasets/inspect", response_model=DatasetSummary)
async def inspect_dataset(file: UploadFile = File(...)):
    raw = await _read_upload(file)
    try:
        dataset = read_table(raw, file.filename)
    except ParseError as e:
        raise HTTPException(status_code=422, detail=f"Could not read file: {e}")

    headers = header_names(dataset)
    return {
        "filename": file.filename,
        "headers": headers,
        "default_column": default_column(dataset),
        "rows": len(dataset) - 1,
    }

@app.post("/compare", response_model=ComparisonResponse)
async def compare_files(
    file1: UploadFile = File(...),
    file2: UploadFile = File(...),
    column1: Optional[str] = Form(None),
    column2: Optional[str] = Form(None),
):
    session = await _compared_session(file1, file2, column1, column2)
    result = session.result
    return {
        "missing_in_first": list(result.missing_in_first),
        "missing_in_second": list(result.missing_in_second),
        "total_first": result.total_first,
        "total_second": result.total_second,
        "missing_in_first_count": result.missing_in_first_count,
        "missing_in_second_count": result.missing_in_second_count,
    }

@app.post("/compare/export")
async def export_comparison(
    file1: UploadFile = File(...),
    file2: UploadFile = File(...),
    column1: Optional[str] = Form(None),
    column2: Optional[str] = Form(None),
):
    session = await _compared_session(file1, file2, column1, column2)
    return Response(
        content=export_results(session),
        media_type=rules.EXPORT_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{rules.EXPORT_FILENAME}"'},
    )
