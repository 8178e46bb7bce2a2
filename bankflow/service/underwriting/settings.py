"""
Underwriting Settings for the loan decision engine.

All rule tables and thresholds are configurable through environment
variables with the UNDERWRITING_ prefix:
    UNDERWRITING_ANNUAL_INTEREST_RATE=0.05
    UNDERWRITING_MIN_CREDIT_SCORE=300
    UNDERWRITING_APPROVAL_RULES_JSON='[[800,100000],[750,75000]]'

Usage:
    from bankflow.service.underwriting.settings import underwriting_settings

    # Defaults (loaded from env)
    rate = underwriting_settings.monthly_rate

    # Or custom settings for testing
    custom = UnderwritingSettings(small_loan_max_amount=1000)
"""

import json
from functools import lru_cache
from typing import List, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class UnderwritingSettings(BaseSettings):
    """
    Configurable parameters for loan underwriting.

    Amounts are whole currency units. Credit scores use the 300-850 scale.
    """

    model_config = SettingsConfigDict(
        env_prefix="UNDERWRITING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Pricing ===
    annual_interest_rate: float = Field(
        default=0.05,
        ge=0.0,
        lt=1.0,
        description="Fixed annual interest rate applied as rate/12 per month",
    )

    # === Terms ===
    term_tiers_json: str = Field(
        default="[[1000,6],[5000,12],[10000,24],[25000,36],[50000,60]]",
        description="Loan terms as JSON array: [[max_amount, months], ...], ascending",
    )
    max_term_months: int = Field(
        default=72,
        gt=0,
        description="Term for amounts above every tier",
    )
    default_term_months: int = Field(
        default=6,
        gt=0,
        description="Term returned for non-positive or non-numeric amounts",
    )

    # === Score floor ===
    min_credit_score: int = Field(
        default=300,
        ge=0,
        description="Scores below this are declined outright",
    )

    # === Small-loan carve-out ===
    small_loan_score_ceiling: int = Field(
        default=500,
        ge=0,
        description="Scores below this qualify for the small-loan exception",
    )
    small_loan_max_amount: float = Field(
        default=1500,
        gt=0,
        description="Largest amount approved under the small-loan exception",
    )

    # === Approval rules ===
    approval_rules_json: str = Field(
        default="[[800,100000],[750,75000],[700,50000],[650,25000],[600,10000],[550,5000],[500,2000]]",
        description="Approval rules as JSON array: [[min_score, max_amount], ...], highest score first",
    )

    @field_validator("term_tiers_json")
    @classmethod
    def validate_term_tiers_json(cls, v: str) -> str:
        """Validate that term tiers are pairs of positive integers in ascending order."""
        tiers = _load_pairs(v, "[max_amount, months]")
        amounts = [tier[0] for tier in tiers]
        if amounts != sorted(amounts):
            raise ValueError("Term tiers must be ordered by ascending max_amount")
        for max_amount, months in tiers:
            if max_amount <= 0 or months <= 0:
                raise ValueError(f"Term tier values must be positive: {[max_amount, months]}")
        return v

    @field_validator("approval_rules_json")
    @classmethod
    def validate_approval_rules_json(cls, v: str) -> str:
        """Validate that approval rules are ordered from the highest score down."""
        rules = _load_pairs(v, "[min_score, max_amount]")
        scores = [rule[0] for rule in rules]
        if scores != sorted(scores, reverse=True):
            raise ValueError("Approval rules must be ordered by descending min_score")
        for min_score, max_amount in rules:
            if max_amount <= 0:
                raise ValueError(f"max_amount must be positive: {max_amount}")
        return v

    @property
    def monthly_rate(self) -> float:
        return self.annual_interest_rate / 12

    @property
    def term_tiers(self) -> List[Tuple[int, int]]:
        """Term tiers mapping an amount ceiling to a term in months."""
        return [tuple(tier) for tier in json.loads(self.term_tiers_json)]

    @property
    def approval_rules(self) -> List[Tuple[int, int]]:
        """Approval rules mapping a score floor to the largest approvable amount."""
        return [tuple(rule) for rule in json.loads(self.approval_rules_json)]


def _load_pairs(raw: str, shape: str) -> List[List[int]]:
    try:
        pairs = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}")
    if not isinstance(pairs, list) or not pairs:
        raise ValueError("Expected a non-empty list")
    for pair in pairs:
        if not isinstance(pair, list) or len(pair) != 2:
            raise ValueError(f"Each entry must be {shape}")
        if not all(isinstance(x, int) and not isinstance(x, bool) for x in pair):
            raise ValueError("All values must be integers")
    return pairs


@lru_cache
def get_underwriting_settings() -> UnderwritingSettings:
    """Get cached underwriting settings instance."""
    return UnderwritingSettings()


underwriting_settings = get_underwriting_settings()
