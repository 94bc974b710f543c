"""Word effects: analysis of lexical properties and board mutation."""

from .models import Effect, EffectKind, Severity, Trigger
from .analyzer import analyze_word, cap_major_effects
from .mutator import apply_effects, apply_effect, player_color

__all__ = [
    # Models
    "Effect",
    "EffectKind",
    "Severity",
    "Trigger",
    # Analysis
    "analyze_word",
    "cap_major_effects",
    # Mutation
    "apply_effects",
    "apply_effect",
    "player_color",
]
