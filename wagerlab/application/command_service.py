"""
Game Command Service - 游戏命令服务

处理所有游戏状态变更操作，遵循CQRS模式。
命令服务负责：
- 在边界处强制转换输入
- 委托结算引擎执行命令
- 把核心异常转换为CommandResult
"""

import logging
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from .types import ApplicationError, CommandResult
from .config_service import ConfigService, get_config_service
from .dto import StakeInput, TradeInput, BankAdjustmentInput
from ..core.events import EventBus, get_event_bus
from ..core.exceptions import InsufficientBankError, InvalidTransitionError
from ..core.invariant import InvariantError
from ..core.market import MarketQuote
from ..core.rng import RandomSource
from ..core.settlement import RoundSettlementEngine, SettlementResult
from ..core.store import GameState

__all__ = ['GameCommandService']


class GameCommandService:
    """游戏命令服务"""

    def __init__(self, engine: Optional[RoundSettlementEngine] = None,
                 config_service: Optional[ConfigService] = None,
                 event_bus: Optional[EventBus] = None,
                 profile: str = "default"):
        """
        初始化命令服务

        Args:
            engine: 结算引擎，如果为None则按游戏规则配置创建
            config_service: 配置服务，如果为None则使用全局配置服务
            event_bus: 事件总线，如果为None则使用全局事件总线
            profile: 游戏规则配置文件名
        """
        self._logger = logging.getLogger(__name__)
        self._config_service = config_service or get_config_service()
        self._event_bus = event_bus or get_event_bus()

        if engine is None:
            rules_result = self._config_service.get_game_rules_config(profile)
            if not rules_result.success:
                raise ApplicationError(
                    f"获取游戏规则配置失败: {rules_result.message}",
                    error_code="CONFIG_LOAD_FAILED"
                )
            rules = rules_result.data
            engine = RoundSettlementEngine(
                random_source=RandomSource(seed=rules.seed),
                event_bus=self._event_bus,
                initial_bank=rules.initial_bank,
                history_limit=rules.history_limit,
                initial_quote=MarketQuote(bid=rules.default_bid, ask=rules.default_ask),
            )

        self._engine = engine
        self._state = engine.new_game_state()
        self._last_result: Optional[SettlementResult] = None

    @property
    def engine(self) -> RoundSettlementEngine:
        return self._engine

    @property
    def state(self) -> GameState:
        """当前游戏状态（只读使用）"""
        return self._state

    @property
    def last_result(self) -> Optional[SettlementResult]:
        """最近一次结算结果，推进或重置后为None"""
        return self._last_result

    # ==================== 命令 ====================

    def set_stake(self, bet_id: Any, amount: Any) -> CommandResult:
        """
        设置某个下注的赌注

        Args:
            bet_id: 下注标识（BetId或其字符串值）
            amount: 赌注金额，非数字视为0
        """
        def action() -> Dict[str, Any]:
            stake = StakeInput(bet_id=bet_id, amount=amount)
            self._engine.set_stake(self._state, stake.bet_id, stake.amount)
            return {
                'bet_id': stake.bet_id.value,
                'amount': stake.amount,
                'total_stake': self._state.total_stake,
            }

        return self._execute("set_stake", action, "赌注已设置")

    def set_market_trade(self, side: Any, units: Any, price: Any = None) -> CommandResult:
        """
        开立市场头寸

        Args:
            side: BUY或SELL
            units: 交易单位
            price: 可选，必须等于报价侧价
        """
        def action() -> Dict[str, Any]:
            trade = TradeInput(side=side, units=units, price=price)
            position = self._engine.set_market_trade(self._state, trade.side, trade.units, trade.price)
            return {
                'side': position.side.value,
                'units': position.units,
                'price': position.price,
                'committed': position.committed,
            }

        return self._execute("set_market_trade", action, "交易已下单")

    def clear_market_trade(self) -> CommandResult:
        """撤销市场头寸"""
        def action() -> Dict[str, Any]:
            self._engine.clear_market_trade(self._state)
            return {'total_stake': self._state.total_stake}

        return self._execute("clear_market_trade", action, "交易已撤销")

    def start_round(self) -> CommandResult:
        """开始并结算一个回合"""
        def action() -> Dict[str, Any]:
            result = self._engine.start_round(self._state)
            self._last_result = result
            return result.to_dict()

        return self._execute("start_round", action, "回合已结算")

    def advance_round(self) -> CommandResult:
        """进入下一回合"""
        def action() -> Dict[str, Any]:
            self._engine.advance_round(self._state)
            self._last_result = None
            return {
                'next_round': self._state.current_round + 1,
                'bid': self._state.market_quote.bid,
                'ask': self._state.market_quote.ask,
            }

        return self._execute("advance_round", action, "已进入下一回合")

    def adjust_bank(self, delta: Any) -> CommandResult:
        """调整银行余额"""
        def action() -> Dict[str, Any]:
            adjustment = BankAdjustmentInput(delta=delta)
            bankroll = self._engine.adjust_bank(self._state, adjustment.delta)
            return {'delta': adjustment.delta, 'bankroll': bankroll}

        return self._execute("adjust_bank", action, "余额已调整")

    def reset_game(self) -> CommandResult:
        """重置游戏"""
        def action() -> Dict[str, Any]:
            self._engine.reset_game(self._state)
            self._last_result = None
            return {'bankroll': self._state.bankroll}

        return self._execute("reset_game", action, "游戏已重置")

    # ==================== 内部方法 ====================

    def _execute(self, command: str, action: Callable[[], Dict[str, Any]],
                 success_message: str) -> CommandResult:
        try:
            data = action()
        except PydanticValidationError as e:
            errors = e.errors()
            detail = errors[0]['msg'] if errors else str(e)
            return CommandResult.validation_error(f"输入无效: {detail}", error_code="INVALID_INPUT")
        except InsufficientBankError as e:
            return CommandResult.business_rule_violation(str(e), error_code="INSUFFICIENT_BANK")
        except InvalidTransitionError as e:
            return CommandResult.business_rule_violation(str(e), error_code="INVALID_TRANSITION")
        except InvariantError as e:
            self._logger.error(f"{command} 违反不变量: {e}")
            return CommandResult.system_error(f"不变量违反: {e}", error_code="INVARIANT_VIOLATION")
        except Exception as e:
            self._logger.exception(f"{command} 执行失败")
            return CommandResult.system_error(f"{command} 执行失败: {e}", error_code="COMMAND_FAILED")

        return CommandResult.success_result(success_message, data)
