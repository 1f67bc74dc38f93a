"""Relation-fetch lifecycle settings."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_float_env_var


@dataclass(frozen=True, slots=True)
class RelationsConfig:
    timeout_seconds: float | None = None


def get_relations_config() -> RelationsConfig:
    return RelationsConfig(timeout_seconds=optional_float_env_var("CITEREL_FETCH_TIMEOUT"))
