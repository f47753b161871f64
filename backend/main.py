import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from comparator import compare_poses
from config import settings
from exceptions import ReportNotFoundError
from feedback import generate_feedback
from models import AnalysisReport, GoldStandardData, PoseLandmarkData, StoredAnalysis
from store import AnalysisStore

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="ThrowForm API", debug=settings.DEBUG)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

store = AnalysisStore(history_limit=settings.HISTORY_LIMIT)


class AnalyzeRequest(BaseModel):
    video_uri: str
    user_frames: list[PoseLandmarkData]
    gold_standard: Optional[GoldStandardData] = None


class AnalyzeResponse(BaseModel):
    report: AnalysisReport
    key_frame_indices: list[int]


@app.get("/api/health")
def health():
    return {"status": "ok"}


@app.post("/api/analyses", response_model=AnalyzeResponse)
def analyze(request: AnalyzeRequest):
    gold = request.gold_standard or store.gold_standard()
    logger.info(
        "Analyzing %s: %d user frames against %d gold frames",
        request.video_uri, len(request.user_frames), len(gold.landmarks),
    )

    comparison = compare_poses(request.user_frames, gold.landmarks, settings.ALIGNMENT)
    report = generate_feedback(comparison, request.video_uri, request.user_frames)
    store.save(report)

    return AnalyzeResponse(report=report, key_frame_indices=comparison.key_frame_indices)


@app.get("/api/analyses", response_model=list[StoredAnalysis])
def list_analyses():
    return store.history()


@app.get("/api/analyses/{analysis_id}", response_model=StoredAnalysis)
def get_analysis(analysis_id: str):
    try:
        return store.get(analysis_id)
    except ReportNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.delete("/api/analyses/{analysis_id}", status_code=204)
def delete_analysis(analysis_id: str):
    try:
        store.delete(analysis_id)
    except ReportNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


@app.get("/api/gold-standard", response_model=GoldStandardData)
def get_gold_standard():
    return store.gold_standard()


@app.put("/api/gold-standard", response_model=GoldStandardData)
def put_gold_standard(data: GoldStandardData):
    store.set_gold_standard(data)
    return data


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
