import uvicorn

from bookstore.core.config import settings


def main():
    uvicorn.run(
        "bookstore.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=not settings.is_production,
    )


if __name__ == "__main__":
    main()
