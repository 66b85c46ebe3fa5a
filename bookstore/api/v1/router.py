from fastapi import APIRouter

from .books import router as books_router

# Create main API router
api_router = APIRouter()

# Include all routers
api_router.include_router(books_router, tags=["Books"])
