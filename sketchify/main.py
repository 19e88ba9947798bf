from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sketchify.config import CORS_ORIGINS, logger
from sketchify.routers import router

# Initialize FastAPI application
app = FastAPI(
    title="Sketchify API",
    description="Floor plan upload, render and project persistence",
    version="1.0.0",
)

app.include_router(router)


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


logger.info("Sketchify API initialized successfully")
