from .configs import (
    DotsConfig,
    GameConfig,
    MatchConfig,
    MaxScoreRule,
    MaxScoreType,
    NassauConfig,
    NassauScoring,
    SixesConfig,
    SkinsConfig,
    SnakeConfig,
    StablefordConfig,
    StrokeConfig,
)
from .cup import (
    CupConfig,
    CupFormat,
    CupGameMode,
    CupPlayer,
    CupResults,
    CupRound,
    RoundResult,
    Team,
    create_cup,
    get_results,
    play_round,
)
from .dots import score_dots, with_estimated_details
from .expenses import (
    Currency,
    CustomSplit,
    Expense,
    ExpenseCategory,
    ExpenseReport,
    SplitMode,
    rate_converter,
    split_expenses,
)
from .match_play import score_match_play
from .nassau import score_nassau
from .round import (
    DomainValidationError,
    GameMode,
    Hole,
    HoleDetail,
    InvariantViolation,
    Player,
    Round,
    RoundStatus,
    cancel_round,
    complete_round,
    new_round,
    normalize_player,
    record_score,
    strokes_received,
)
from .settlement import (
    Payable,
    SettlementResult,
    build_transfers,
    net_balances,
    net_payables,
    settle,
    split_amount,
)
from .sixes import score_sixes
from .skins import score_skins
from .snake import score_snake
from .stableford import score_stableford
from .stroke_play import rank_players, round_stats, score_stroke_play
from .wagering import RoundWagers, net_settlement, process_round_wagers, score_game

__all__ = [
    "CupConfig",
    "CupFormat",
    "CupGameMode",
    "CupPlayer",
    "CupResults",
    "CupRound",
    "Currency",
    "CustomSplit",
    "DomainValidationError",
    "DotsConfig",
    "Expense",
    "ExpenseCategory",
    "ExpenseReport",
    "GameConfig",
    "GameMode",
    "Hole",
    "HoleDetail",
    "InvariantViolation",
    "MatchConfig",
    "MaxScoreRule",
    "MaxScoreType",
    "NassauConfig",
    "NassauScoring",
    "Payable",
    "Player",
    "Round",
    "RoundResult",
    "RoundStatus",
    "RoundWagers",
    "SettlementResult",
    "SixesConfig",
    "SkinsConfig",
    "SnakeConfig",
    "SplitMode",
    "StablefordConfig",
    "StrokeConfig",
    "Team",
    "build_transfers",
    "cancel_round",
    "complete_round",
    "create_cup",
    "get_results",
    "net_balances",
    "net_payables",
    "net_settlement",
    "new_round",
    "normalize_player",
    "play_round",
    "process_round_wagers",
    "rank_players",
    "rate_converter",
    "record_score",
    "round_stats",
    "score_dots",
    "score_game",
    "score_match_play",
    "score_nassau",
    "score_sixes",
    "score_skins",
    "score_snake",
    "score_stableford",
    "score_stroke_play",
    "settle",
    "split_amount",
    "split_expenses",
    "strokes_received",
    "with_estimated_details",
]
