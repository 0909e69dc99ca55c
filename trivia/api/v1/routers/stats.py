from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from trivia.api.v1.dependencies import get_stats_service, get_visitor_counter
from trivia.features.stats.services import StatsService, VisitorCounter


router = APIRouter(tags=["stats"])


class TodayStatsOut(BaseModel):
    games_played_today: int
    total_players: int


class WinnerOut(BaseModel):
    name: str
    phone: str
    score: int
    game_name: str
    game_code: str
    completed_at: Optional[datetime] = None


class AnalyticsOut(BaseModel):
    total_games: int
    games_played_today: int
    total_players: int
    completed_games: int
    winners_count: int
    winners: List[WinnerOut]
    average_players_per_game: float


class VisitorCountOut(BaseModel):
    count: int


@router.get("/stats/today", summary="Statistiques du jour", response_model=TodayStatsOut)
def stats_today(svc: StatsService = Depends(get_stats_service)):
    return svc.today()


# ⚠️ expose les téléphones en clair : pas d'authentification dans ce service
@router.get("/admin/analytics", summary="Statistiques détaillées et gagnants", response_model=AnalyticsOut)
def admin_analytics(svc: StatsService = Depends(get_stats_service)):
    return svc.analytics()


@router.post("/visitors/track", summary="Compter une visite", response_model=VisitorCountOut)
def track_visitor(counter: VisitorCounter = Depends(get_visitor_counter)):
    return {"count": counter.increment()}


@router.get("/visitors/count", summary="Nombre de visites", response_model=VisitorCountOut)
def visitor_count(counter: VisitorCounter = Depends(get_visitor_counter)):
    return {"count": counter.count()}
