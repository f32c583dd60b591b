"""
Bots module - Automated players.

Provides:
- BotPolicy: Interface for bot decision-making
- RandomPolicy, FirstValidPolicy, GreedyPolicy: Built-in play styles
- autoplay: Drive a live round with a policy
"""

from .policy import (
    BotPolicy,
    BotDecision,
    RandomPolicy,
    FirstValidPolicy,
    GreedyPolicy,
    POLICIES,
    autoplay,
)

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstValidPolicy",
    "GreedyPolicy",
    "POLICIES",
    "autoplay",
]
