"""
游戏状态存储模块

持有银行、赌注、条款、市场报价/头寸和回合历史，只由结算引擎修改。
"""

from .types import RoundRecord
from .game_state import GameState, DEFAULT_QUOTE

__all__ = ['GameState', 'RoundRecord', 'DEFAULT_QUOTE']
