"""
Game Query Service - 游戏查询服务

处理所有游戏只读操作，遵循CQRS模式。
查询服务负责：
- 获取余额、总赌注和游戏状态快照
- 查询当前条款和下注表
- 查询市场报价
- 查询回合历史
"""

import time
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from .types import QueryResult
from ..core.bets import BetId, GameType, bets_for_game
from ..core.market import MarketQuote
from ..core.odds import Terms

__all__ = ['GameQueryService', 'GameStateSnapshot', 'BetView']


@dataclass(frozen=True)
class BetView:
    """下注表中的一行"""
    bet_id: str
    game: str
    label: str
    probability: float
    probability_fraction: str
    multiplier: Optional[float]
    bias: Optional[str]
    stake: int

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return asdict(self)


@dataclass(frozen=True)
class GameStateSnapshot:
    """游戏状态快照"""
    round_number: int
    phase: str
    bankroll: int
    total_stake: int
    left_to_bet: int
    stakes: Dict[str, int]
    market_bid: int
    market_ask: int
    position: Dict[str, Any]
    last_outcome: Optional[Dict[str, Any]]
    history_length: int
    timestamp: float

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return asdict(self)


class GameQueryService:
    """游戏查询服务"""

    def __init__(self, command_service):
        """
        初始化查询服务

        Args:
            command_service: 命令服务实例，用于读取游戏状态
        """
        self._command_service = command_service

    @property
    def _state(self):
        return self._command_service.state

    def get_bankroll(self) -> QueryResult[int]:
        return QueryResult.success_result(self._state.bankroll)

    def get_total_stake(self) -> QueryResult[int]:
        """全部赌注加市场占用资金"""
        return QueryResult.success_result(self._state.total_stake)

    def get_left_to_bet(self) -> QueryResult[int]:
        return QueryResult.success_result(self._command_service.engine.left_to_bet(self._state))

    def get_terms(self, bet_id: Any) -> QueryResult[Terms]:
        """
        获取某个下注在当前回合的条款

        Args:
            bet_id: BetId或其字符串值
        """
        try:
            bet_id = BetId(bet_id)
        except ValueError:
            return QueryResult.validation_error(f"未知的下注: {bet_id}", error_code="UNKNOWN_BET")

        terms = self._state.terms.get(bet_id)
        if terms is None:
            return QueryResult.failure_result(f"下注{bet_id.value}尚无条款", error_code="TERMS_NOT_FOUND")
        return QueryResult.success_result(terms)

    def get_bet_table(self, game: Any) -> QueryResult[List[BetView]]:
        """
        获取某个游戏的下注表，包含名称、概率、倍数、偏置和当前赌注

        Args:
            game: GameType或其名称（COINS, DICE, FIRST_TWO）
        """
        if not isinstance(game, GameType):
            try:
                game = GameType[str(game).upper()]
            except KeyError:
                return QueryResult.validation_error(f"未知的游戏: {game}", error_code="UNKNOWN_GAME")

        rows = []
        for definition in bets_for_game(game):
            terms = self._state.terms.get(definition.id)
            rows.append(BetView(
                bet_id=definition.id.value,
                game=definition.game.name,
                label=definition.label,
                probability=float(definition.probability),
                probability_fraction=str(definition.probability),
                multiplier=terms.multiplier if terms else None,
                bias=terms.bias.value if terms else None,
                stake=self._state.stake_for(definition.id),
            ))
        return QueryResult.success_result(rows)

    def get_market_quote(self) -> QueryResult[MarketQuote]:
        return QueryResult.success_result(self._state.market_quote)

    def get_round_history(self, limit: Optional[int] = None) -> QueryResult[List[Dict[str, Any]]]:
        """
        获取回合历史，新的在前

        Args:
            limit: 最多返回的条数，None表示全部
        """
        if limit is not None and limit < 0:
            return QueryResult.validation_error(f"limit不能为负数: {limit}", error_code="INVALID_LIMIT")

        records = list(self._state.history)
        if limit is not None:
            records = records[:limit]
        return QueryResult.success_result([record.to_dict() for record in records])

    def is_round_active(self) -> QueryResult[bool]:
        return QueryResult.success_result(self._state.is_round_active)

    def has_completed_round(self) -> QueryResult[bool]:
        return QueryResult.success_result(self._state.has_completed_round)

    def get_game_state_snapshot(self) -> QueryResult[GameStateSnapshot]:
        """获取游戏状态快照"""
        state = self._state
        position = state.market_position
        last_result = self._command_service.last_result

        snapshot = GameStateSnapshot(
            round_number=state.current_round,
            phase=state.phase.name,
            bankroll=state.bankroll,
            total_stake=state.total_stake,
            left_to_bet=self._command_service.engine.left_to_bet(state),
            stakes={bet_id.value: amount for bet_id, amount in state.stakes.items()},
            market_bid=state.market_quote.bid,
            market_ask=state.market_quote.ask,
            position={
                'side': position.side.value,
                'units': position.units,
                'price': position.price,
                'committed': position.committed,
            },
            last_outcome=last_result.to_dict() if last_result is not None else None,
            history_length=len(state.history),
            timestamp=time.time(),
        )
        return QueryResult.success_result(snapshot)
