"""
回合状态机模块

Idle → Active → Settled → (advance) → Idle
"""

from .types import RoundPhase, PhaseTransition
from .round_state_machine import RoundStateMachine

__all__ = ['RoundPhase', 'PhaseTransition', 'RoundStateMachine']
