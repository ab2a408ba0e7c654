"""
Types for the championship-window engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class InvalidTeamError(ValueError):
    pass


class ZoneType(str, Enum):
    ELITE = "ELITE"
    FAVORABLE = "FAVORABLE"
    CAUTION = "CAUTION"
    DANGER = "DANGER"
    CLOSED = "CLOSED"
    NO_DATA = "NO_DATA"


class StatusType(str, Enum):
    WIDE_OPEN = "wide_open"
    OPEN = "open"
    CLOSING = "closing"
    SOFT_CLOSED = "soft_closed"
    HARD_CLOSED = "hard_closed"


class AlertType(str, Enum):
    POSITIVE = "positive"
    WARNING = "warning"
    DANGER = "danger"


@dataclass(frozen=True)
class Team:
    id: str
    name: str
    city: str = ""
    conference: str = ""
    division: str = ""
    primary_color: str = ""
    secondary_color: str = ""


@dataclass(frozen=True)
class CapHitYear:
    year: int
    amount: float
    base_salary: float = 0.0
    signing_bonus: float = 0.0
    is_void_year: bool = False
    dead_money_if_cut: Optional[float] = None
    is_fifth_year_option: bool = False


@dataclass(frozen=True)
class PerformanceMetrics:
    epa_per_play: float = 0.0
    cpoe: float = 0.0
    qbr: float = 0.0
    pff_grade: float = 0.0
    wins: float = 0.0
    playoff_wins: float = 0.0

    def is_unproven(self) -> bool:
        return self.epa_per_play == 0 and self.qbr == 0 and self.pff_grade == 0


@dataclass(frozen=True)
class QBContract:
    player_id: str
    player_name: str
    team_id: str
    contract_type: str
    total_value: float = 0.0
    aav: float = 0.0
    guaranteed_money: float = 0.0
    years_remaining: int = 0
    cap_hits: List[CapHitYear] = field(default_factory=list)
    performance_metrics: Optional[PerformanceMetrics] = None

    def cap_hit_for(self, year: int) -> Optional[CapHitYear]:
        for cap_hit in self.cap_hits:
            if cap_hit.year == year:
                return cap_hit
        return None

    @property
    def is_rookie_deal(self) -> bool:
        return self.contract_type == "rookie"


@dataclass(frozen=True)
class SeasonResult:
    wins: int = 0
    losses: int = 0
    made_playoffs: bool = False
    playoff_wins: int = 0
    conf_championship: bool = False
    super_bowl_appearance: bool = False
    super_bowl_win: bool = False
    coach_tier: Optional[float] = None
    qb_production_tier: Optional[float] = None


@dataclass(frozen=True)
class RookieStar:
    player_id: str
    player_name: str
    position: str
    current_year_cap_hit: float
    pff_grade: float
    extension_eligible_year: int
    draft_year: int = 0
    draft_round: int = 0
    team_id: str = ""


@dataclass(frozen=True)
class QualifiedRookieStar:
    player: RookieStar
    estimated_market_value: float
    surplus_value: float


@dataclass
class NonQBSurplusResult:
    total_surplus: float = 0.0
    star_rookies: List[QualifiedRookieStar] = field(default_factory=list)
    sustainability_years: int = 0
    surplus_as_percent_of_cap: float = 0.0


@dataclass(frozen=True)
class WindowZone:
    zone: ZoneType
    color: str
    label: str
    description: str
    historical_win_rate: str


@dataclass(frozen=True)
class WindowStatus:
    status: StatusType
    color: str
    label: str


@dataclass(frozen=True)
class ComponentScores:
    cap: float
    quality: float
    surplus: float
    trajectory: float
    sustainability: float
    core: float


@dataclass(frozen=True)
class TeamWindowScore:
    team_id: str
    overall_score: int
    components: ComponentScores
    qb_cap_hit: float
    qb_cap_hit_percent: float
    salary_cap: int
    years_until_threshold: int
    window_zone: WindowZone
    window_status: WindowStatus
    updated_at: datetime
    non_qb_surplus: float = 0.0
    has_cap_data: bool = True


@dataclass(frozen=True)
class WindowAlert:
    team_id: str
    type: AlertType
    message: str
    timestamp: datetime


@dataclass(frozen=True)
class CapProjectionPoint:
    year: int
    cap_hit_percent: float
    cap_hit_amount: float
    projected_cap: int
    is_projected: bool
    is_void_year: bool = False


@dataclass(frozen=True)
class PeakCapHit:
    year: int
    amount: float
    percent: float


@dataclass(frozen=True)
class RestructureAssessment:
    has_restructure_room: bool
    max_restructure_amount: float
    recommendation: str


@dataclass(frozen=True)
class EffectiveCost:
    raw_qb_cap_hit_percent: float
    effective_qb_cost: float
    surplus_offset: float
    explanation: str


@dataclass(frozen=True)
class ScatterPoint:
    team_id: str
    team_name: str
    qb_name: str
    qb_cap_hit_percent: float
    playoff_round: int
    window_zone: ZoneType
    color: str


@dataclass(frozen=True)
class PlayoffSeasonTeam:
    team_id: str
    qb_cap_hit_percent: float
    result: int
    note: str = ""


@dataclass(frozen=True)
class PlayoffSeason:
    """One season of playoff history; result is the round reached (0 missed .. 5 won the Super Bowl)."""

    year: int
    label: str = ""
    in_progress: bool = False
    sb_winner: Optional[str] = None
    sb_loser: Optional[str] = None
    teams: List[PlayoffSeasonTeam] = field(default_factory=list)


@dataclass(frozen=True)
class SeasonInfo:
    sb_winner: Optional[str]
    sb_loser: Optional[str]
    in_progress: bool
