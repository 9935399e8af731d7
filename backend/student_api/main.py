"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the Student API. Controllers
are intentionally thin: they accept validated requests, delegate to
`StudentService`, and map its results to status codes.

Endpoints implemented:
- GET /students?name=&page=&pageSize=
- GET /students/{student_id}
- POST /students
- PUT /students/{student_id}
- DELETE /students/{student_id}
- DELETE /students
- GET /health
"""

from fastapi import FastAPI, Depends, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
from typing import Optional
import json
import logging
import time
import uuid
from .database import create_db_and_tables, get_session
from . import services
from .schemas import MessageOut, StudentIn, StudentOut, StudentPage
from .config import settings

# ids and paging values are bound to a 32-bit store integer
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1

app = FastAPI(title="Student CRUD API")
logger = logging.getLogger("student_api.api")
if not logging.getLogger().handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

# Wide-open CORS in dev so local frontends on any port can call the API.
if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

create_db_and_tables()


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception(
            "request_failed %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "duration_ms": elapsed_ms,
                },
                ensure_ascii=True,
            ),
        )
        raise
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    logger.info(
        "request_done %s",
        json.dumps(
            {
                "request_id": req_id,
                "path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "duration_ms": elapsed_ms,
            },
            ensure_ascii=True,
        ),
    )
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report invalid input as 400 with messages grouped per field."""
    errors = {}
    for error in exc.errors():
        field = ".".join(str(x) for x in error["loc"] if x not in ("body", "query", "path")) or "request"
        errors.setdefault(field, []).append(error["msg"])
    return JSONResponse(
        status_code=400,
        content={
            "title": "One or more validation errors occurred.",
            "status": 400,
            "errors": errors,
        },
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(SQLAlchemyError)
async def store_exception_handler(request: Request, exc: SQLAlchemyError):
    """Store failures are not recovered here; log them and answer with a generic 500."""
    logger.error(
        "store_error request_id=%s path=%s",
        getattr(request.state, "request_id", ""),
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"message": "An unexpected error occurred."})


def _ensure_id_in_range(student_id: int) -> None:
    """Ids beyond the store's integer range cannot exist; answer 404 before querying."""
    if not INT_MIN <= student_id <= INT_MAX:
        raise HTTPException(status_code=404, detail=services.FailureReason.NOT_FOUND.value)


def _raise_for_failure(result: services.ServiceResult) -> None:
    """Translate a failed `ServiceResult` into 404 or 409."""
    if result.ok:
        return
    status_code = 409 if result.error.is_conflict else 404
    raise HTTPException(status_code=status_code, detail=result.error.value)


@app.get('/students', response_model=StudentPage)
def list_students(
    name: Optional[str] = None,
    page: Optional[int] = Query(default=None, ge=INT_MIN, le=INT_MAX),
    page_size: Optional[int] = Query(default=None, alias="pageSize", ge=INT_MIN, le=INT_MAX),
    db: Session = Depends(get_session),
):
    """List students ordered by name.

    `name` filters case-insensitively on a substring of the name. Paging
    applies only when both `page` and `pageSize` are positive.
    """
    svc = services.StudentService(db)
    return svc.list_paged(name, page, page_size)


@app.get('/students/{student_id}', response_model=StudentOut)
def get_student(student_id: int, db: Session = Depends(get_session)):
    """Return a single student or 404."""
    _ensure_id_in_range(student_id)
    student = services.StudentService(db).get(student_id)
    if not student:
        raise HTTPException(status_code=404, detail=services.FailureReason.NOT_FOUND.value)
    return student


@app.post('/students', response_model=StudentOut, status_code=201)
def create_student(payload: StudentIn, request: Request, response: Response, db: Session = Depends(get_session)):
    """Create a student.

    Returns 201 with the stored student and a `Location` header pointing
    at it, or 409 when the email is already used.
    """
    result = services.StudentService(db).create(payload)
    _raise_for_failure(result)
    created = result.value
    response.headers["Location"] = str(request.url_for("get_student", student_id=created.id))
    return created


@app.put('/students/{student_id}', response_model=MessageOut)
def update_student(student_id: int, payload: StudentIn, db: Session = Depends(get_session)):
    """Fully replace a student's name, email and gender.

    Returns 404 when the student does not exist and 409 when the email
    belongs to another student.
    """
    _ensure_id_in_range(student_id)
    result = services.StudentService(db).update(student_id, payload)
    _raise_for_failure(result)
    return {'message': 'Student updated successfully!'}


@app.delete('/students/{student_id}', response_model=MessageOut)
def delete_student(student_id: int, db: Session = Depends(get_session)):
    """Delete one student or return 404."""
    _ensure_id_in_range(student_id)
    result = services.StudentService(db).delete(student_id)
    _raise_for_failure(result)
    return {'message': 'Student deleted successfully!'}


@app.delete('/students', response_model=MessageOut)
def delete_all_students(db: Session = Depends(get_session)):
    """Delete every student and report how many were removed."""
    count = services.StudentService(db).delete_all()
    return {'message': f'Deleted {count} students.'}


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
