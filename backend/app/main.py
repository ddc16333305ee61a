import asyncio
import json
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel
from starlette.responses import PlainTextResponse, StreamingResponse

from backend.analyzers.codescan import detect_language, rule_catalog
from backend.analyzers.codescan.models import Language
from backend.analyzers.selftest import run_self_test

from .config import ServiceConfig, setup_logging
from .orchestrator import build_report, run_analysis, run_fix
from .store import history_store


config = ServiceConfig.from_env()
setup_logging(config.log_level)


class AnalyzeRequest(BaseModel):
    code: str
    language: Optional[Language] = None


class AnalyzeResponse(BaseModel):
    analysis_id: Optional[str]
    language: str
    language_detected: bool
    health_score: int
    score_band: str
    counts: Dict[str, int]
    issues: List[Dict[str, Any]]


class DetectRequest(BaseModel):
    code: str


class DetectResponse(BaseModel):
    language: str


class FixRequest(BaseModel):
    code: str
    issue_id: str
    language: Optional[Language] = None


class FixResponse(BaseModel):
    code: str
    diff: str
    issues: List[Dict[str, Any]]
    health_score: int


app = FastAPI(title="AI Debug Helper API")


def _check_size(code: str) -> None:
    if len(code) > config.max_input_chars:
        raise HTTPException(
            status_code=413,
            detail=f"code exceeds {config.max_input_chars} characters",
        )


@app.post("/analyze", response_model=AnalyzeResponse)
def analyze(req: AnalyzeRequest) -> AnalyzeResponse:
    _check_size(req.code)
    return AnalyzeResponse(**run_analysis(req.code, req.language))


@app.post("/detect", response_model=DetectResponse)
def detect(req: DetectRequest) -> DetectResponse:
    _check_size(req.code)
    return DetectResponse(language=detect_language(req.code))


@app.post("/fix", response_model=FixResponse)
def fix(req: FixRequest) -> FixResponse:
    _check_size(req.code)
    try:
        result = run_fix(req.code, req.issue_id, req.language)
    except LookupError:
        raise HTTPException(status_code=404, detail="issue not found")
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return FixResponse(**result)


@app.post("/report", response_class=PlainTextResponse)
def report(req: AnalyzeRequest) -> PlainTextResponse:
    _check_size(req.code)
    return PlainTextResponse(build_report(req.code, req.language), media_type="text/markdown")


@app.get("/rules")
def rules(language: Optional[Language] = None) -> dict:
    return {"language": language, "groups": rule_catalog(language)}


@app.get("/history")
def history() -> dict:
    return {"entries": [entry.to_dict() for entry in history_store.list_entries()]}


# declared before /history/{entry_id} so "events" is not taken for an id
@app.get("/history/events")
async def history_events(request: Request) -> StreamingResponse:
    queue = history_store.subscribe()

    async def stream():
        try:
            while True:
                if await request.is_disconnected():
                    break
                try:
                    event = await asyncio.wait_for(queue.get(), timeout=1.0)
                except asyncio.TimeoutError:
                    continue
                yield f"data: {json.dumps(event)}\n\n"
        finally:
            history_store.unsubscribe(queue)

    return StreamingResponse(stream(), media_type="text/event-stream")


@app.get("/history/{entry_id}")
def history_entry(entry_id: str) -> dict:
    entry = history_store.get_entry(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="history entry not found")
    return entry.to_dict()


@app.get("/selftest")
def selftest() -> dict:
    return run_self_test()


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
