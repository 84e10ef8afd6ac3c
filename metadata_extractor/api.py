"""
HTTP trigger for the extraction pipeline.

GET / runs one extraction and answers with {"ok": true, "n": <files>},
or with a 500 carrying the error message when the run aborts.
"""
import logging

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.responses import JSONResponse

from metadata_extractor import __version__
from metadata_extractor.pipeline import PipelineOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["extraction"])


@router.get("/")
def run_extraction(request: Request):
    """Run the pipeline against the configured feed."""
    orchestrator: PipelineOrchestrator = request.app.state.orchestrator
    try:
        return orchestrator.run()
    except Exception as e:
        logger.error("Extraction run failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(e), "type": type(e).__name__}
        )


def create_app(orchestrator: PipelineOrchestrator) -> FastAPI:
    app = FastAPI(title="metadata-extractor", version=__version__)
    app.state.orchestrator = orchestrator
    app.include_router(router)
    return app
