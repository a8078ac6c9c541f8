import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Form, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse

from .config import HOST, PORT, VOTES_FILE
from .errors import InvalidChoice, PersistenceWriteFailure
from .logger import setup_logger
from .models import Counter, VoteIn
from .services import ResultService, VoteService
from .state import CounterStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: make sure the votes file exists and is normalized
    try:
        initial = app.state.store.ensure_initialized()
        logger.info("Votes file ready at %s: %s", app.state.store.path, initial.model_dump())
    except PersistenceWriteFailure:
        logger.exception("Failed to initialize votes file")
    yield


def get_vote_service(request: Request) -> VoteService:
    return request.app.state.vote_service


def get_result_service(request: Request) -> ResultService:
    return request.app.state.result_service


async def write_failure_handler(request: Request, exc: PersistenceWriteFailure):
    logger.error("Error handling %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    if request.url.path.startswith("/api/"):
        return JSONResponse(status_code=500, content={"error": "Server error"})
    return PlainTextResponse("Server error", status_code=500)


def create_app(store: Optional[CounterStore] = None, serialize: bool = True) -> FastAPI:
    setup_logger()
    store = store or CounterStore(VOTES_FILE)

    app = FastAPI(title="Jajang vs Jjamppong", lifespan=lifespan)
    app.state.store = store
    app.state.vote_service = VoteService(store, serialize=serialize)
    app.state.result_service = ResultService(store)
    app.add_exception_handler(PersistenceWriteFailure, write_failure_handler)

    @app.get("/")
    def root():
        return RedirectResponse(url="/api/result", status_code=302)

    # landing target of the form flow; no HTML page is served here
    @app.get("/result")
    def result_page():
        return RedirectResponse(url="/api/result", status_code=302)

    @app.post("/vote")
    def vote_form(
        vote: Optional[str] = Form(None),
        votes: VoteService = Depends(get_vote_service),
    ):
        try:
            votes.cast_vote(vote)
        except InvalidChoice:
            return PlainTextResponse("Invalid vote", status_code=400)
        return RedirectResponse(url="/result", status_code=302)

    @app.post("/api/vote")
    def vote_json(v: VoteIn, votes: VoteService = Depends(get_vote_service)) -> Counter:
        try:
            return votes.cast_vote(v.vote)
        except InvalidChoice:
            raise HTTPException(status_code=400, detail="Invalid vote")

    @app.get("/api/result")
    def result(results: ResultService = Depends(get_result_service)) -> Counter:
        return results.get_results()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("jjvote.main:app", host=HOST, port=PORT, log_level="info")
