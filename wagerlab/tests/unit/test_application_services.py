"""
命令服务和查询服务的单元测试
"""

import pytest

from wagerlab.application import (
    ApplicationError,
    BetView,
    CommandResult,
    ConfigService,
    ConfigType,
    GameCommandService,
    GameStateSnapshot,
    QueryResult,
    ResultStatus,
)
from wagerlab.core.bets import BetId, GameType
from wagerlab.core.events import EventBus
from wagerlab.core.market import MarketQuote
from wagerlab.core.outcome import Outcome
from wagerlab.core.settlement import RoundSettlementEngine

from wagerlab.tests.anti_cheat.core_usage_checker import CoreUsageChecker
from wagerlab.tests.fixtures import FixedOddsGenerator

SUM_7_OUTCOME = Outcome.from_strings("HHT", (3, 4), "AH KS 10D")


@pytest.mark.unit
class TestGameCommandService:
    """命令服务测试"""

    def test_set_stake(self, command_service):
        """测试设置赌注"""
        result = command_service.set_stake("sum_7", 100)

        # 反作弊检查
        CoreUsageChecker.verify_real_objects(result, "CommandResult")

        assert result.success
        assert result.status is ResultStatus.SUCCESS
        assert result.data == {'bet_id': 'sum_7', 'amount': 100, 'total_stake': 100}
        assert command_service.state.stake_for(BetId.SUM_7) == 100

    def test_non_numeric_stake_is_zero(self, command_service):
        """测试非数字赌注视为0"""
        command_service.set_stake(BetId.DOUBLES, 50)
        result = command_service.set_stake(BetId.DOUBLES, "fifty")

        assert result.success
        assert result.data['amount'] == 0
        assert BetId.DOUBLES not in command_service.state.stakes

    def test_unknown_bet_is_invalid_input(self, command_service):
        result = command_service.set_stake("sum_13", 10)
        assert not result.success
        assert result.status is ResultStatus.VALIDATION_ERROR
        assert result.error_code == "INVALID_INPUT"

    def test_start_round(self, command_service, scripted_outcomes):
        """测试开始回合并结算"""
        scripted_outcomes.push(SUM_7_OUTCOME)
        command_service.set_stake("sum_7", 100)

        result = command_service.start_round()

        assert result.success
        assert result.data['bank_before'] == 1000
        assert result.data['bank_after'] == 1100
        assert result.data['round_pnl'] == 200
        assert result.data['coins'] == "HHT"
        assert command_service.last_result is not None
        assert command_service.last_result.round_number == 1

    def test_insufficient_bank(self, command_service):
        """测试总赌注超过余额"""
        command_service.set_stake("sum_7", 800)
        command_service.set_stake("doubles", 300)

        result = command_service.start_round()

        assert not result.success
        assert result.status is ResultStatus.BUSINESS_RULE_VIOLATION
        assert result.error_code == "INSUFFICIENT_BANK"
        assert command_service.state.bankroll == 1000
        assert command_service.state.current_round == 0

    def test_invalid_transition(self, command_service):
        """测试阶段不允许的命令"""
        assert command_service.advance_round().error_code == "INVALID_TRANSITION"

        command_service.start_round()
        result = command_service.set_stake("sum_7", 10)
        assert result.status is ResultStatus.BUSINESS_RULE_VIOLATION
        assert result.error_code == "INVALID_TRANSITION"
        assert command_service.start_round().error_code == "INVALID_TRANSITION"

    def test_advance_round_clears_last_result(self, command_service):
        command_service.start_round()
        result = command_service.advance_round()

        assert result.success
        assert result.data['next_round'] == 2
        assert command_service.last_result is None

    def test_market_trade(self, command_service):
        """测试市场交易命令"""
        result = command_service.set_market_trade("buy", "5")

        assert result.success
        assert result.data == {'side': 'BUY', 'units': 5, 'price': 23, 'committed': 115}

        mismatch = command_service.set_market_trade("SELL", 2, price=22)
        assert mismatch.error_code == "INVALID_TRANSITION"

        zero_units = command_service.set_market_trade("SELL", "lots")
        assert zero_units.error_code == "INVALID_TRANSITION"

        too_big = command_service.set_market_trade("BUY", 100)
        assert too_big.error_code == "INSUFFICIENT_BANK"
        assert command_service.state.market_position.units == 5

        assert command_service.clear_market_trade().success
        assert not command_service.state.market_position.is_open

    def test_adjust_bank(self, command_service):
        assert command_service.adjust_bank("250").data == {'delta': 250, 'bankroll': 1250}
        result = command_service.adjust_bank(-5000)
        assert result.error_code == "INSUFFICIENT_BANK"
        assert command_service.state.bankroll == 1250

    def test_reset_game(self, command_service):
        command_service.set_stake("sum_7", 100)
        command_service.start_round()
        result = command_service.reset_game()

        assert result.success
        assert result.data == {'bankroll': 1000}
        assert command_service.last_result is None
        assert command_service.state.current_round == 0

    def test_builds_engine_from_profile(self):
        """测试按配置文件创建引擎"""
        service = GameCommandService(config_service=ConfigService(), event_bus=EventBus(),
                                     profile="high_roller")
        assert service.state.bankroll == 10000
        assert service.state.market_quote == MarketQuote(bid=21, ask=23)
        assert len(service.state.terms) == len(BetId)

    def test_rules_unavailable(self):
        """测试规则配置获取失败时构造服务抛出ApplicationError"""
        class UnavailableRulesConfig(ConfigService):
            def get_game_rules_config(self, profile="default"):
                return QueryResult.failure_result("规则存储不可用", error_code="CONFIG_UNAVAILABLE")

        with pytest.raises(ApplicationError) as exc_info:
            GameCommandService(config_service=UnavailableRulesConfig(), event_bus=EventBus())

        assert exc_info.value.error_code == "CONFIG_LOAD_FAILED"
        assert "规则存储不可用" in exc_info.value.message

    def test_negative_bank_recovery(self, config_service, event_bus, scripted_outcomes):
        """测试卖出亏损使余额为负后仍可继续游戏"""
        service = GameCommandService(
            engine=RoundSettlementEngine(
                event_bus=event_bus,
                outcome_generator=scripted_outcomes,
                odds_generator=FixedOddsGenerator(),
                initial_quote=MarketQuote(bid=3, ask=5),
            ),
            config_service=config_service,
            event_bus=event_bus,
        )
        assert service.set_market_trade("SELL", 333).success
        scripted_outcomes.push(Outcome.from_strings("HHH", (1, 1), "KS KH KD"))
        assert service.start_round().data['bank_after'] == -10988
        assert service.advance_round().success

        assert service.start_round().success
        assert service.advance_round().success
        assert service.adjust_bank(5000).data == {'delta': 5000, 'bankroll': -5988}
        rejected = service.adjust_bank(-1)
        assert rejected.error_code == "INSUFFICIENT_BANK"
        assert service.state.bankroll == -5988

    def test_custom_initial_quote(self):
        """测试初始报价来自规则配置"""
        config_service = ConfigService()
        config_service.update_config(ConfigType.GAME_RULES, "default", {'default_bid': 10, 'default_ask': 12})

        service = GameCommandService(config_service=config_service, event_bus=EventBus())
        assert service.state.market_quote == MarketQuote(bid=10, ask=12)


@pytest.mark.unit
class TestGameQueryService:
    """查询服务测试"""

    def test_bankroll_and_totals(self, command_service, query_service):
        command_service.set_stake("sum_7", 100)
        command_service.set_market_trade("BUY", 2)

        assert query_service.get_bankroll().data == 1000
        assert query_service.get_total_stake().data == 146
        assert query_service.get_left_to_bet().data == 854

    def test_get_terms(self, query_service):
        result = query_service.get_terms("sum_7")

        # 反作弊检查
        CoreUsageChecker.verify_real_objects(result, "QueryResult")

        assert result.success
        assert result.data.multiplier == 2.0

    def test_get_terms_unknown_bet(self, query_service):
        result = query_service.get_terms("sum_13")
        assert not result.success
        assert result.error_code == "UNKNOWN_BET"

    @pytest.mark.parametrize("game,expected", [
        (GameType.COINS, 7),
        ("dice", 7),
        ("FIRST_TWO", 4),
    ])
    def test_bet_table(self, query_service, game, expected):
        """测试下注表行数"""
        result = query_service.get_bet_table(game)
        assert result.success
        assert len(result.data) == expected
        assert all(isinstance(row, BetView) for row in result.data)

    def test_bet_table_contents(self, command_service, query_service):
        command_service.set_stake("sum_7", 40)
        rows = {row.bet_id: row for row in query_service.get_bet_table(GameType.DICE).data}

        sum_7 = rows['sum_7']
        assert sum_7.probability_fraction == "1/6"
        assert sum_7.probability == pytest.approx(1 / 6)
        assert sum_7.multiplier == 2.0
        assert sum_7.bias == "fair"
        assert sum_7.stake == 40
        assert sum_7.to_dict()['game'] == "DICE"

    def test_bet_table_unknown_game(self, query_service):
        result = query_service.get_bet_table("roulette")
        assert result.error_code == "UNKNOWN_GAME"

    def test_market_quote(self, query_service):
        assert query_service.get_market_quote().data == MarketQuote(bid=21, ask=23)

    def test_round_history(self, command_service, query_service):
        """测试回合历史新的在前"""
        for _ in range(3):
            command_service.start_round()
            command_service.advance_round()

        history = query_service.get_round_history().data
        assert [r['round_number'] for r in history] == [3, 2, 1]
        assert [r['round_number'] for r in query_service.get_round_history(limit=2).data] == [3, 2]
        assert query_service.get_round_history(limit=-1).error_code == "INVALID_LIMIT"

    def test_phase_queries(self, command_service, query_service):
        assert not query_service.is_round_active().data
        assert not query_service.has_completed_round().data
        command_service.start_round()
        assert query_service.has_completed_round().data

    def test_snapshot(self, command_service, query_service, scripted_outcomes):
        """测试游戏状态快照"""
        scripted_outcomes.push(SUM_7_OUTCOME)
        command_service.set_stake("sum_7", 100)
        command_service.start_round()

        result = query_service.get_game_state_snapshot()
        snapshot = result.data

        assert isinstance(snapshot, GameStateSnapshot)
        assert snapshot.round_number == 1
        assert snapshot.phase == "SETTLED"
        assert snapshot.bankroll == 1100
        assert snapshot.stakes == {'sum_7': 100}
        assert snapshot.position['side'] == "NONE"
        assert snapshot.last_outcome['card_sum'] == 24
        assert snapshot.history_length == 1
        assert snapshot.to_dict()['market_bid'] == 21


@pytest.mark.unit
def test_result_factories():
    """测试结果工厂方法"""
    failure = CommandResult.system_error("失败", error_code="X")
    assert not failure.success
    assert failure.status is ResultStatus.SYSTEM_ERROR

    query = QueryResult.validation_error("无效")
    assert query.status is ResultStatus.VALIDATION_ERROR
    assert query.data is None
