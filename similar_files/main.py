import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from similar_files.api.routes import router as api_router
from similar_files.config import public_settings, settings, setup_logging

logger = setup_logging()
app = FastAPI(title="Similar Files")

logger.info("Application starting")
logger.info("Loaded settings: %s", public_settings())


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", extra={"url_path": request.url.path})
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(api_router)


def run() -> None:
    uvicorn.run(app, host=settings.app_host, port=settings.app_port)


if __name__ == "__main__":
    run()
