from dotenv import load_dotenv
from fastapi import FastAPI

from patent_insights import __version__
from patent_insights.config import configure_logging

# IMPORT ROUTERS
from patent_insights.routers.patents import router as patents_router

load_dotenv()
configure_logging()

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title="Patent Insights API",
    description="""
# Patent Portfolio Insights

Search a patent portfolio by company name, ISIN, URL or technology theme.

| Endpoint | Method | Description |
|----------|--------|-------------|
| `/api/v1/patents/search` | GET | Records, twelve metric series and a summary |
| `/api/v1/patents/classify` | GET | How a raw query is classified |

When the patent API is unreachable or returns unusable data, the search
answers with sample data and a summary starting with a connection notice.
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    """Root endpoint that returns API information."""
    return {
        "message": "Welcome to Patent Insights API",
        "version": __version__,
        "documentation": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "endpoints": [
            {"method": "GET", "endpoint": "/api/v1/patents/search", "params": ["q", "theme"]},
            {"method": "GET", "endpoint": "/api/v1/patents/classify", "params": ["q"]},
        ],
    }


# REGISTER ROUTERS
app.include_router(patents_router)


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "patent_insights.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
