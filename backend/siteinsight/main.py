from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
import uvicorn

from siteinsight.analyzer import analyze_bulk, analyze_url
from siteinsight.config import Settings, get_settings
from siteinsight.rules import load_rules
from siteinsight.schemas import (
    AnalysisResult,
    AnalyzeRequest,
    BulkAnalyzeRequest,
    BulkAnalyzeResponse,
    MessageResponse,
)
from siteinsight.submissions import SubmissionStore, missing_fields
from siteinsight.url_validator import is_valid_url


router = APIRouter()


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@router.get("/")
def root():
    return {"message": "Backend is running"}


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.post("/analyze", response_model=AnalysisResult)
async def analyze_endpoint(body: AnalyzeRequest, request: Request):
    """Analyze a single website: signals + desktop/mobile screenshots."""
    if not is_valid_url(body.url):
        raise HTTPException(status_code=400, detail="Invalid URL")

    state = request.app.state
    try:
        return await analyze_url(body.url.strip(), state.settings, state.rules)
    except Exception as e:
        print(f"[analyze] Failed {body.url}: {e}")
        raise HTTPException(status_code=500, detail="Website analysis failed")


@router.post("/analyze/bulk", response_model=BulkAnalyzeResponse)
async def analyze_bulk_endpoint(body: BulkAnalyzeRequest, request: Request):
    """Analyze several websites sequentially in one browser session."""
    if not isinstance(body.urls, list) or not body.urls:
        raise HTTPException(status_code=400, detail="URLs array required")

    state = request.app.state
    try:
        return await analyze_bulk(
            [u.strip() if isinstance(u, str) else u for u in body.urls],
            state.settings,
            state.rules,
        )
    except Exception as e:
        print(f"[analyze-bulk] Failed: {e}")
        raise HTTPException(status_code=500, detail="Bulk analysis failed")


@router.post("/submit", response_model=MessageResponse)
async def submit_endpoint(record: dict, request: Request):
    """Append a caller-supplied analysis record to the submission log."""
    missing = missing_fields(record)
    if missing:
        raise HTTPException(status_code=400, detail=f"Invalid submission: missing {', '.join(missing)}")

    await request.app.state.submissions.append(record)
    return MessageResponse(message="Website submitted successfully")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        Path(settings.screenshots_dir).mkdir(parents=True, exist_ok=True)
        app.state.settings = settings
        app.state.rules = load_rules(settings.category_rules_file)
        app.state.submissions = SubmissionStore(settings.submissions_file)
        print(f"[startup] {len(app.state.rules)} category rules, "
              f"screenshots in {Path(settings.screenshots_dir).resolve()}")
        yield

    app = FastAPI(title="SiteInsight API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": "Invalid request body"})

    app.include_router(router)

    # Screenshots served read-only from the web root; routes above win
    app.mount("/", StaticFiles(directory=settings.screenshots_dir, check_dir=False), name="screenshots")

    return app


app = create_app()


def run():
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
