"""Default configuration parameters for the bidding trainer."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TrainerParams:
    """Drill setup parameters."""
    trainee_seat: str = "S"                         # Seat the trainee bids from
    vulnerability: str = "None"                     # None, NS, EW or Both


@dataclass(frozen=True)
class DealParams:
    """Deal generator parameters."""
    max_attempts: int = 10000                       # Shuffles before giving up
    seed: Optional[int] = None                      # Fixed seed for reproducible drills


@dataclass(frozen=True)
class EvaluationParams:
    """Rule evaluation parameters."""
    max_or_branches: int = 4                        # Branches allowed in one or_()
    max_or_depth: int = 2                           # Nesting depth of or_() inside or_()
    skip_illegal_calls: bool = True                 # Treat an illegal matched call as no result


@dataclass(frozen=True)
class LoggingParams:
    """Logging parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    trainer: TrainerParams
    deal: DealParams
    evaluation: EvaluationParams
    logging: LoggingParams


EVALUATION_DEFAULTS = EvaluationParams()


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        trainer=TrainerParams(),
        deal=DealParams(),
        evaluation=EVALUATION_DEFAULTS,
        logging=LoggingParams(),
    )
