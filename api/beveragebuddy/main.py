from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import Session
import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import text

from . import config
from .database import engine, init_db
from .demo_data import seed_demo_data
from .errors import NotFoundError, StorageError, ValidationError
from .routes import categories, reviews

# Set up logging
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Beverage Buddy API",
    description="Keep track of the beverages you tasted and how you liked them",
    version="1.0.0"
)

@app.on_event("startup")
async def startup_event():
    logger.debug("Starting up the application")
    try:
        # Test database connection first
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            logger.info("Database connection test successful")

        # Initialize tables if they don't exist
        init_db()
        logger.debug("Database tables initialized successfully")

        if config.SEED_DEMO_DATA:
            with Session(engine) as session:
                seed_demo_data(session)
    except SQLAlchemyError as e:
        logger.error(f"Database error during startup: {str(e)}")
        raise
    except StorageError as e:
        logger.error(f"Storage error during startup: {str(e)}")
        raise

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": [
                {"field": v.field, "rule": v.rule, "message": v.message}
                for v in exc.violations
            ]
        },
    )

@app.exception_handler(NotFoundError)
async def not_found_error_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    # Details were logged where the error was raised
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "The operation failed, please try again later"},
    )

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, replace with specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(categories.router, prefix="/api/categories", tags=["Categories"])
app.include_router(reviews.router, prefix="/api/reviews", tags=["Reviews"])

@app.get("/")
async def root():
    return {"message": "Welcome to Beverage Buddy API"}

@app.get("/health")
async def health_check():
    return {"status": "healthy", "environment": config.ENV}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
