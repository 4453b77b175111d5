"""
下注定义模块

18个固定下注定义（7个硬币、7个骰子、4个两张牌），
以及每个下注的精确概率和判定谓词。
"""

from .types import GameType, BetId, BetDefinition
from .probability import probability_of
from .predicates import evaluate
from .catalog import BET_CATALOG, get_bet_definition, bets_for_game

__all__ = [
    'GameType',
    'BetId',
    'BetDefinition',
    'probability_of',
    'evaluate',
    'BET_CATALOG',
    'get_bet_definition',
    'bets_for_game',
]
