"""
回合结算引擎

状态: IDLE → ACTIVE → SETTLED → (advance) → IDLE

start_round在同一个事务中完成开始、抽样和结算：先验证并计算全部结果，
再一次性写回状态存储，外部永远看不到"已扣款但未结算"的中间状态。
任何被拒绝的命令都不改变状态。
"""

import logging
from typing import Optional

from ..bets import BetId
from ..events import EventBus, EventType, DomainEvent, get_event_bus
from ..exceptions import InsufficientBankError, InvalidTransitionError
from ..invariant import SettlementInvariantChecker
from ..market import TradeSide, MarketQuote, MarketPosition, MarketPricer
from ..odds import OddsGenerator
from ..outcome import OutcomeGenerator
from ..rng import RandomSource
from ..state_machine import RoundPhase
from ..store import GameState, RoundRecord, DEFAULT_QUOTE
from .calculator import compute_settlement
from .types import SettlementResult

__all__ = ['RoundSettlementEngine']


class RoundSettlementEngine:
    """回合结算引擎"""

    def __init__(self,
                 random_source: Optional[RandomSource] = None,
                 event_bus: Optional[EventBus] = None,
                 outcome_generator: Optional[OutcomeGenerator] = None,
                 odds_generator: Optional[OddsGenerator] = None,
                 market_pricer: Optional[MarketPricer] = None,
                 invariant_checker: Optional[SettlementInvariantChecker] = None,
                 initial_bank: int = 1000,
                 history_limit: int = 80,
                 initial_quote: MarketQuote = DEFAULT_QUOTE,
                 game_id: str = "wagerlab"):
        """
        初始化结算引擎

        Args:
            random_source: 共享随机源，未单独注入的生成器都使用它
            event_bus: 事件总线，如果为None则使用全局事件总线
            outcome_generator: 结果生成器
            odds_generator: 赔率生成器
            market_pricer: 做市报价器
            invariant_checker: 结算不变量检查器
            initial_bank: 新游戏的初始余额
            history_limit: 保留的已结算回合数
            initial_quote: 首回合之前的报价
            game_id: 事件的聚合ID
        """
        random_source = random_source or RandomSource()
        self._outcomes = outcome_generator or OutcomeGenerator(random_source)
        self._odds = odds_generator or OddsGenerator(random_source)
        self._pricer = market_pricer or MarketPricer(random_source)
        self._event_bus = event_bus or get_event_bus()
        self._invariants = invariant_checker or SettlementInvariantChecker()
        self._initial_bank = initial_bank
        self._history_limit = history_limit
        self._initial_quote = initial_quote
        self._game_id = game_id
        self._logger = logging.getLogger(__name__)

    @property
    def game_id(self) -> str:
        return self._game_id

    # ==================== 状态创建 ====================

    def new_game_state(self) -> GameState:
        """创建新游戏状态：生成首回合条款，报价使用初始报价"""
        state = GameState.create(self._initial_bank, self._history_limit)
        state.terms = self._odds.generate_all_terms()
        state.market_quote = self._initial_quote
        self._logger.info("新游戏已创建，初始余额 %d", state.bankroll)
        return state

    # ==================== 查询 ====================

    @staticmethod
    def total_stake(state: GameState) -> int:
        """全部赌注加市场占用资金"""
        return state.total_stake

    @staticmethod
    def left_to_bet(state: GameState) -> int:
        """余额中尚未分配的部分"""
        return max(0, state.bankroll - state.total_stake)

    @staticmethod
    def available_for_trade(state: GameState) -> int:
        """可用于市场交易的资金（替换已有头寸时，其占用资金视为可用）"""
        return max(0, state.bankroll - state.bet_stake_total)

    # ==================== 输入命令 ====================

    def set_stake(self, state: GameState, bet_id: BetId, amount: int) -> None:
        """
        设置某个下注的赌注，负数钳为0

        Raises:
            InvalidTransitionError: 不在IDLE阶段时
        """
        self._require_idle(state, "set_stake")
        amount = max(0, int(amount))
        if amount:
            state.stakes[bet_id] = amount
        else:
            state.stakes.pop(bet_id, None)

        self._publish(EventType.STAKE_CHANGED, state, {
            'bet_id': bet_id.value, 'amount': amount, 'total_stake': state.total_stake,
        })

    def set_market_trade(self, state: GameState, side: TradeSide, units: int,
                         price: Optional[int] = None) -> MarketPosition:
        """
        开立市场头寸，替换已有头寸

        Args:
            side: BUY按ask成交，SELL按bid成交
            units: 单位数，必须为正
            price: 可选，必须等于当前报价侧价

        Raises:
            InvalidTransitionError: 不在IDLE阶段、units<=0、方向为NONE或价格与报价不符时
            InsufficientBankError: 占用资金超过可用余额时
        """
        self._require_idle(state, "set_market_trade")
        if side is TradeSide.NONE:
            self._reject(state, "set_market_trade", "交易方向不能为NONE")
        if units <= 0:
            self._reject(state, "set_market_trade", f"交易单位必须大于0，当前: {units}")

        quoted = self._pricer.price_for(side, state.market_quote)
        if price is not None and price != quoted:
            self._reject(state, "set_market_trade", f"价格{price}与当前报价{quoted}不符")

        needed = units * quoted
        available = self.available_for_trade(state)
        if needed > available:
            self._logger.warning("交易被拒绝: 需要%d，可用%d", needed, available)
            self._publish(EventType.COMMAND_REJECTED, state, {
                'command': 'set_market_trade', 'reason': 'INSUFFICIENT_BANK',
            })
            raise InsufficientBankError(
                f"余额不足以完成交易: 需要{needed}，可用{available}",
                required=needed,
                available=available,
            )

        position = MarketPosition(side=side, units=units, price=quoted)
        state.market_position = position
        self._publish(EventType.MARKET_TRADE_PLACED, state, {
            'side': side.value, 'units': units, 'price': quoted, 'committed': position.committed,
        })
        return position

    def clear_market_trade(self, state: GameState) -> None:
        """撤销市场头寸"""
        self._require_idle(state, "clear_market_trade")
        state.market_position = MarketPosition.empty()
        self._publish(EventType.MARKET_TRADE_CLEARED, state, {})

    def adjust_bank(self, state: GameState, delta: int) -> int:
        """
        调整银行余额

        Returns:
            调整后的余额

        Raises:
            InvalidTransitionError: 回合进行中时
            InsufficientBankError: 负的delta使余额低于0时
        """
        if state.is_round_active:
            self._reject(state, "adjust_bank", "回合进行中不能调整余额")
        state.bank.adjust(int(delta), "外部调整")
        self._publish(EventType.BANK_ADJUSTED, state, {'delta': int(delta), 'bankroll': state.bankroll})
        return state.bankroll

    # ==================== 回合转换 ====================

    def start_round(self, state: GameState) -> SettlementResult:
        """
        开始并结算一个回合

        Returns:
            结算结果

        Raises:
            InvalidTransitionError: 不在IDLE阶段时
            InsufficientBankError: 总赌注超过余额时（零赌注总是允许）
            InvariantError: 结算结果或结算后状态违反不变量时（内部错误）
        """
        if not state.state_machine.can_transition_to(RoundPhase.ACTIVE):
            self._reject(state, "start_round", f"当前阶段{state.phase.name}不能开始回合")

        total_stake = state.total_stake
        bank_before = state.bankroll
        if not state.bank.can_afford(total_stake):
            self._logger.warning("开始回合被拒绝: 总赌注%d超过余额%d", total_stake, bank_before)
            self._publish(EventType.COMMAND_REJECTED, state, {
                'command': 'start_round', 'reason': 'INSUFFICIENT_BANK',
            })
            raise InsufficientBankError(
                "余额不足以覆盖所有游戏的赌注",
                required=total_stake,
                available=bank_before,
            )

        round_number = state.current_round + 1
        position = state.market_position
        outcome = self._outcomes.generate()
        breakdown = compute_settlement(state.stakes, state.terms, position, outcome)

        result = SettlementResult(
            round_number=round_number,
            outcome=outcome,
            total_stake=total_stake,
            winnings=breakdown.winnings,
            market_pnl=breakdown.market_pnl,
            market_committed=breakdown.market_committed,
            bank_before=bank_before,
            bank_after=bank_before - total_stake + breakdown.credit,
            bet_results=breakdown.bet_results,
            position=position,
        )
        self._invariants.check_result(result, raise_on_violation=True)

        # 写回状态
        state.state_machine.transition_to(RoundPhase.ACTIVE, "start_round", round_number)
        state.current_round = round_number
        state.bank.commit(total_stake, round_number, "回合赌注")
        state.bank.credit(breakdown.credit, round_number, "回合结算", metadata={
            'winnings': breakdown.winnings,
            'market_pnl': breakdown.market_pnl,
            'market_committed': breakdown.market_committed,
        })
        state.last_outcome = outcome
        state.history.appendleft(RoundRecord(
            round_number=round_number,
            outcome=outcome,
            pnl=breakdown.round_pnl,
            winnings=breakdown.winnings,
            market_pnl=breakdown.market_pnl,
            total_stake=total_stake,
            bank_after=result.bank_after,
            position=position,
        ))
        state.state_machine.transition_to(RoundPhase.SETTLED, "start_round", round_number)

        self._invariants.check_all(result, state, raise_on_violation=True)

        self._logger.info(
            "第%d回合结算: coins=%s dice=%s cards=%s pnl=%d bank=%d",
            round_number, outcome.coin_string, outcome.dice,
            " ".join(str(c) for c in outcome.cards), result.round_pnl, result.bank_after,
        )
        self._publish(EventType.ROUND_STARTED, state, {'total_stake': total_stake})
        self._publish(EventType.ROUND_SETTLED, state, result.to_dict())
        return result

    def advance_round(self, state: GameState) -> None:
        """
        进入下一回合：刷新全部条款和报价，清空赌注和头寸

        Raises:
            InvalidTransitionError: 不在SETTLED阶段时
        """
        if not state.state_machine.can_transition_to(RoundPhase.IDLE):
            self._reject(state, "advance_round", f"当前阶段{state.phase.name}不能进入下一回合")

        new_terms = self._odds.generate_all_terms()

        state.state_machine.transition_to(RoundPhase.IDLE, "advance_round", state.current_round)
        state.stakes.clear()
        state.market_position = MarketPosition.empty()
        state.terms = new_terms
        state.last_outcome = None
        self._refresh_quotes(state)

        self._logger.info("进入第%d回合", state.current_round + 1)
        self._publish(EventType.ROUND_ADVANCED, state, {'next_round': state.current_round + 1})
        self._publish(EventType.TERMS_REFRESHED, state, {
            bet_id.value: terms.multiplier for bet_id, terms in state.terms.items()
        })

    def reset_game(self, state: GameState) -> None:
        """重置游戏：恢复初始余额，清空历史、赌注和头寸，重新生成条款和报价"""
        new_terms = self._odds.generate_all_terms()

        state.bank.reset()
        state.state_machine.reset()
        state.stakes.clear()
        state.market_position = MarketPosition.empty()
        state.history.clear()
        state.current_round = 0
        state.last_outcome = None
        state.terms = new_terms
        self._refresh_quotes(state)

        self._logger.info("游戏已重置，余额 %d", state.bankroll)
        self._publish(EventType.GAME_RESET, state, {'bankroll': state.bankroll})

    # ==================== 内部方法 ====================

    def _refresh_quotes(self, state: GameState) -> None:
        # 只在新周期开始且没有头寸时刷新
        if state.phase is not RoundPhase.IDLE or state.market_position.is_open:
            return
        state.market_quote = self._pricer.generate_quotes()
        self._publish(EventType.QUOTES_REFRESHED, state, {
            'bid': state.market_quote.bid, 'ask': state.market_quote.ask,
        })

    def _require_idle(self, state: GameState, command: str) -> None:
        try:
            state.state_machine.require_phase(RoundPhase.IDLE, command)
        except InvalidTransitionError as e:
            self._announce_rejection(state, command, str(e))
            raise

    def _reject(self, state: GameState, command: str, message: str) -> None:
        self._announce_rejection(state, command, message)
        raise InvalidTransitionError(message, phase=state.phase.name, command=command)

    def _announce_rejection(self, state: GameState, command: str, message: str) -> None:
        self._logger.warning("命令被拒绝 %s: %s", command, message)
        self._publish(EventType.COMMAND_REJECTED, state, {
            'command': command, 'reason': 'INVALID_TRANSITION', 'message': message,
        })

    def _publish(self, event_type: EventType, state: GameState, data: dict) -> None:
        self._event_bus.publish(DomainEvent.create(
            event_type=event_type,
            aggregate_id=self._game_id,
            data=data,
            round_number=state.current_round,
        ))
