import logging
from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .core.config import settings
from .routers.analyze import router as analyze_router, empty_text_response

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="News Verdict Backend", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.CORS_ORIGINS),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analyze_router)

@app.exception_handler(RequestValidationError)
async def invalid_request(request: Request, exc: RequestValidationError):
    # unusable /analyze bodies (wrong newsText type, malformed JSON) count as missing text
    if request.url.path == "/analyze":
        logger.info("Rejected /analyze body: %s", exc.errors())
        return empty_text_response()
    return await request_validation_exception_handler(request, exc)

@app.exception_handler(Exception)
async def internal_error(request: Request, exc: Exception):
    logger.exception("Error analyzing request %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})

@app.get("/health")
def health():
    return {"status": "ok", "service": "newsverdict"}

def run():
    import uvicorn
    uvicorn.run("newsverdict.main:app", host="0.0.0.0", port=settings.PORT)
