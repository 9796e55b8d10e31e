import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from parkshare.config import Config
from parkshare.database import init_db
from parkshare.views.parking_view import router

logging.basicConfig(level=Config.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        init_db()
        logger.info("Database Initialized Successfully")
    except Exception as e:
        logger.error(f"Failed to initialized the database {e}")
        raise
    yield



app: FastAPI = FastAPI(title="ParkShare", lifespan=lifespan)
app.include_router(router)

# MISSING OR MALFORMED FIELDS ARE A CLIENT ERROR LIKE ANY OTHER VALIDATION FAILURE
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})
