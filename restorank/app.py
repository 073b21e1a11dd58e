from __future__ import annotations

import logging
import os
from functools import partial

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .auth.dependencies import current_user_id, require_admin, require_user
from .auth.users import authenticate
from .embeddings.rebuild import rebuild_user_embedding
from .embeddings.store import TasteEmbeddingStore
from .recommendations.cache import ResultCache
from .recommendations.config import DEFAULT_RANKING_CONFIG
from .recommendations.models import (
    LoginRequest,
    PicksRequest,
    PicksResponse,
    RerankRequest,
    RerankResponse,
)
from .recommendations.pipeline import rank_candidates, select_picks
from .signals.config import DEFAULT_SIGNAL_CONFIG
from .signals.models import AddSignalRequest, AddSignalResponse, SignalsResponse, SignalType
from .signals.recorder import record_signal
from .signals.store import SignalStore
from .signals.trigger import EmbeddingTrigger

logger = logging.getLogger(__name__)

app = FastAPI(title="Restaurant Re-ranking API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "restorank-secret-change-in-production"),
)

ranking_cache = ResultCache(
    ttl=DEFAULT_RANKING_CONFIG.cache_ttl_seconds,
    max_entries=DEFAULT_RANKING_CONFIG.cache_max_entries,
)
signal_store = SignalStore()
embedding_store = TasteEmbeddingStore()
embedding_trigger = EmbeddingTrigger(
    partial(rebuild_user_embedding, signal_store=signal_store, embedding_store=embedding_store),
    max_workers=DEFAULT_SIGNAL_CONFIG.max_workers,
)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Recommendation endpoints ─────────────────────────────────────────────


@app.post("/recommendations/rerank", response_model=RerankResponse)
def rerank_endpoint(
    body: RerankRequest,
    user: dict = Depends(require_user),
) -> RerankResponse:
    return rank_candidates(body, cache=ranking_cache)


@app.post("/recommendations/picks", response_model=PicksResponse)
def picks_endpoint(
    body: PicksRequest,
    user: dict = Depends(require_user),
) -> PicksResponse:
    return select_picks(body, cache=ranking_cache)


# ── Taste signal endpoints ───────────────────────────────────────────────


@app.get("/taste-signals", response_model=SignalsResponse)
def list_signals(
    limit: int = Query(50, ge=1, le=200),
    signal_type: SignalType | None = Query(None, alias="type"),
    user_id: str = Depends(current_user_id),
) -> SignalsResponse:
    signals = signal_store.list_for_user(user_id, limit=limit, signal_type=signal_type)
    return SignalsResponse(signals=signals, total=len(signals))


@app.post("/taste-signals", response_model=AddSignalResponse)
def add_signal_endpoint(
    body: AddSignalRequest,
    user_id: str = Depends(current_user_id),
) -> AddSignalResponse:
    # Best effort: a storage failure is reported in the body, not as an error
    signal = record_signal(user_id, body, signal_store, embedding_trigger)
    return AddSignalResponse(success=signal is not None, signal=signal)


@app.delete("/taste-signals/{signal_id}")
def delete_signal(signal_id: str, user_id: str = Depends(current_user_id)) -> dict:
    if not signal_store.delete(user_id, signal_id):
        raise HTTPException(status_code=404, detail="Signal not found")
    return {"success": True}


# ── Taste profile endpoints ──────────────────────────────────────────────


@app.get("/taste-profile/embedding")
def embedding_status(user_id: str = Depends(current_user_id)) -> dict:
    record = embedding_store.get(user_id)
    if record is None:
        return {"has_embedding": False, "signal_count": signal_store.count_for_user(user_id)}
    return {"has_embedding": True, **record.summary()}


@app.post("/taste-profile/rebuild")
def rebuild_embedding(user_id: str = Depends(current_user_id)) -> dict:
    try:
        record = rebuild_user_embedding(user_id, signal_store, embedding_store)
    except Exception:
        logger.exception("Taste embedding rebuild failed for user %s", user_id)
        raise HTTPException(status_code=500, detail="Failed to rebuild taste embedding")

    if record is None:
        return {
            "success": True,
            "message": "Not enough data to build taste profile",
            "embedding_generated": False,
        }
    return {
        "success": True,
        "message": "Taste embedding rebuilt successfully",
        "embedding_generated": True,
        "taste_text": record.taste_text,
        "signals_used": record.signals_used,
    }


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/analytics")
def analytics(user: dict = Depends(require_admin)) -> dict:
    return compute_analytics(get_events(), signal_store.all())


@app.get("/cache/stats")
def cache_stats(user: dict = Depends(require_admin)) -> dict:
    return ranking_cache.stats()
