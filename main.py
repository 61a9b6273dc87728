import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

import models
from config import settings
from database import engine
from exceptions import FitfolioError, ValidationError
# Import routers directly
from routers.admin import router as admin_router
from routers.auth import router as auth_router
from routers.clothing_items import router as clothing_items_router
from routers.outfits import router as outfits_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("fitfolio")

app = FastAPI(title="Fitfolio API")

# Uploaded photos are served back as-is
os.makedirs(settings.upload_dir, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Admin routes first so /clothing-items/{item_id} never shadows them
app.include_router(admin_router)
app.include_router(auth_router)
app.include_router(clothing_items_router)
app.include_router(outfits_router)


@app.exception_handler(FitfolioError)
async def fitfolio_error_handler(request: Request, exc: FitfolioError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{field}: {error.get('msg')}" if field else error.get("msg"))
    detail = "; ".join(messages) or ValidationError.detail
    return JSONResponse(status_code=ValidationError.status_code, content={"detail": detail})


@app.on_event("startup")
def startup_event():
    models.Base.metadata.create_all(bind=engine)
    logger.info("Database ready")


@app.on_event("shutdown")
def shutdown_event():
    engine.dispose()


@app.get("/")
def root():
    return {"message": "Welcome to Fitfolio API"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
