"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: str = "false") -> bool:
    """Only "true" (case insensitive) counts as enabled."""
    return os.getenv(name, default).lower() == "true"


def _env_seed() -> int | None:
    """Parse BLACKJACK_SEED; unset or empty means OS entropy."""
    raw = os.getenv("BLACKJACK_SEED", "").strip()
    return int(raw) if raw else None


@dataclass(frozen=True)
class GameConfig:
    """Table rules for a round engine."""

    num_decks: int = field(
        default_factory=lambda: int(os.getenv("BLACKJACK_NUM_DECKS", "1"))
    )
    penetration: float = field(
        default_factory=lambda: float(os.getenv("BLACKJACK_PENETRATION", "0.75"))
    )
    dealer_hits_soft_17: bool = field(
        default_factory=lambda: _env_bool("BLACKJACK_DEALER_HITS_SOFT_17")
    )
    blackjack_payout: float = 1.5
    seed: int | None = field(default_factory=_env_seed)

    def __post_init__(self) -> None:
        """Validate rule values."""
        if self.num_decks < 1:
            raise ValueError("num_decks must be at least 1")
        if not 0.0 <= self.penetration < 1.0:
            raise ValueError("penetration must be in [0, 1)")
        if self.blackjack_payout < 1.0:
            raise ValueError("blackjack_payout must be at least 1.0")


@dataclass(frozen=True)
class AppConfig:
    """Demo runner configuration."""

    log_level: str = field(
        default_factory=lambda: os.getenv("BLACKJACK_LOG_LEVEL", "WARNING").upper()
    )
    num_players: int = field(
        default_factory=lambda: int(os.getenv("BLACKJACK_NUM_PLAYERS", "2"))
    )
    default_bet: int = field(
        default_factory=lambda: int(os.getenv("BLACKJACK_DEFAULT_BET", "100"))
    )

    game: GameConfig = field(default_factory=GameConfig)


# Global configuration instance
config = AppConfig()
