from __future__ import annotations

import logging
from typing import Literal

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

from sentiscope.config import get_settings
from sentiscope.schemas import (
    AnalyzeRequest,
    BatchRequest,
    BatchResponse,
    ImportRequest,
    SentimentResult,
    SentimentSummary,
)
from sentiscope.services import (
    HuggingFaceService,
    IngestError,
    LexiconSentiment,
    SentimentAnalyzer,
    items_from_file,
)
from sentiscope.services import export
from sentiscope.store import ResultStore

settings = get_settings()
logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="Sentiment Analysis Dashboard API",
    version="0.1.0",
    description="Classify text as positive, negative or neutral with explanations.",
)

logger = logging.getLogger("uvicorn.error")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

result_store = ResultStore()
hf_service: HuggingFaceService | None = None
# Remote classification is on unless explicitly disabled; a missing token
# simply routes every call to the fallback scorer.
if settings.remote_enabled:
    hf_service = HuggingFaceService(
        api_key=settings.hf_api_key,
        model=settings.sentiment_model,
        base_url=settings.hf_api_url,
        timeout=settings.hf_timeout_seconds,
        max_input_chars=settings.hf_max_input_chars,
    )
analyzer = SentimentAnalyzer(
    remote=hf_service,
    local=LexiconSentiment(),
    remote_timeout=settings.hf_timeout_seconds,
    batch_delay=settings.batch_delay_seconds,
    batch_concurrency=settings.batch_concurrency,
)

EXPORT_MEDIA_TYPES = {
    "csv": ("text/csv", "sentiment-analysis-results.csv"),
    "json": ("application/json", "sentiment-analysis-results.json"),
    "html": ("text/html", "sentiment-analysis-report.html"),
}


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/analyze", response_model=SentimentResult)
async def analyze_text(payload: AnalyzeRequest) -> SentimentResult:
    result = await analyzer.analyze(payload.text, payload.source)
    await result_store.add_many([result])
    return result


@app.post(
    "/analyze/batch",
    response_model=BatchResponse,
    summary="Analyze several texts; output order matches input order.",
)
async def analyze_batch(payload: BatchRequest) -> BatchResponse:
    items = [item for item in payload.items if item.text.strip()]
    if not items:
        raise HTTPException(status_code=400, detail="Please enter text items to analyze")

    logger.info("Batch analysis requested: items=%d", len(items))
    results = await analyzer.analyze_batch(items)
    await result_store.add_many(results)
    return BatchResponse(results=results)


@app.post(
    "/analyze/import",
    response_model=BatchResponse,
    summary="Analyze every text found in an uploaded .txt, .csv or .json file.",
)
async def analyze_import(payload: ImportRequest) -> BatchResponse:
    try:
        items = items_from_file(payload.filename, payload.content)
    except IngestError as err:
        raise HTTPException(status_code=400, detail=str(err))
    if not items:
        raise HTTPException(status_code=400, detail="No text found in file")

    logger.info("Imported %d items from %s", len(items), payload.filename)
    results = await analyzer.analyze_batch(items)
    await result_store.add_many(results)
    return BatchResponse(results=results)


@app.get("/results", response_model=list[SentimentResult])
async def list_results() -> list[SentimentResult]:
    return await result_store.list_results()


@app.delete("/results")
async def clear_results() -> dict[str, int]:
    return {"removed": await result_store.clear()}


@app.get("/results/summary", response_model=SentimentSummary)
async def results_summary() -> SentimentSummary:
    return await result_store.summary()


@app.get("/results/export")
async def export_results(format: Literal["csv", "json", "html"] = "csv") -> Response:
    results = await result_store.list_results()
    if not results:
        raise HTTPException(status_code=404, detail="No analysis results to export")

    renderers = {"csv": export.to_csv, "json": export.to_json, "html": export.to_html}
    media_type, filename = EXPORT_MEDIA_TYPES[format]
    return Response(
        content=renderers[format](results),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
