"""
Game Flow Integration Tests

通过命令服务和查询服务驱动完整的多回合流程，验证结算等式、事件序列和模块边界。
所有测试都使用真实的核心对象。
"""

import importlib
import pkgutil
from typing import List

import pytest

import wagerlab.core
from wagerlab.application import ConfigService, GameCommandService, GameQueryService
from wagerlab.core.events import DomainEvent, EventBus, EventType, create_function_handler
from wagerlab.core.odds import MIN_MULTIPLIER
from wagerlab.core.state_machine import RoundPhase

from wagerlab.tests.anti_cheat.core_usage_checker import CoreUsageChecker


def _build_services(profile: str = "deterministic"):
    bus = EventBus()
    command_service = GameCommandService(config_service=ConfigService(), event_bus=bus, profile=profile)
    return command_service, GameQueryService(command_service), bus


def _play_rounds(command_service: GameCommandService, rounds: int) -> List[dict]:
    """每回合下注两个游戏并开一个小头寸，返回每回合的结算数据"""
    settled = []
    for _ in range(rounds):
        assert command_service.set_stake("first_coin_h", 10).success
        assert command_service.set_stake("sum_7", 5).success
        assert command_service.set_market_trade("SELL", 1).success
        result = command_service.start_round()
        assert result.success, result.message
        settled.append(result.data)
        assert command_service.advance_round().success
    return settled


@pytest.mark.integration
class TestGameFlowIntegration:
    """完整游戏流程集成测试"""

    def test_multi_round_bank_equation(self):
        """测试多回合中每回合都满足结算等式"""
        command_service, query_service, _ = _build_services()

        settled = _play_rounds(command_service, 12)

        for data in settled:
            expected = (data['bank_before'] - data['total_stake'] + data['winnings']
                        + data['market_pnl'] + data['market_committed'])
            assert data['bank_after'] == expected

        for previous, current in zip(settled, settled[1:]):
            assert current['bank_before'] == previous['bank_after']

        assert query_service.get_bankroll().data == settled[-1]['bank_after']
        history = query_service.get_round_history().data
        assert [r['round_number'] for r in history] == list(range(12, 0, -1))

    def test_deterministic_profile_is_reproducible(self):
        """测试相同种子的两局游戏完全一致"""
        first, _, _ = _build_services()
        second, _, _ = _build_services()

        assert _play_rounds(first, 5) == _play_rounds(second, 5)

    def test_terms_and_quotes_refresh_each_round(self):
        """测试每回合条款和报价都满足约束"""
        command_service, query_service, _ = _build_services()

        for _ in range(20):
            quote = query_service.get_market_quote().data
            assert 3 <= quote.bid < quote.ask <= 39
            for terms in command_service.state.terms.values():
                assert terms.multiplier >= MIN_MULTIPLIER
            command_service.start_round()
            command_service.advance_round()

    def test_event_sequence(self):
        """测试一个回合发布的事件序列"""
        command_service, _, bus = _build_services()
        received: List[DomainEvent] = []
        bus.subscribe_all(create_function_handler(received.append))

        command_service.set_stake("doubles", 20)
        command_service.start_round()
        command_service.advance_round()

        assert [e.event_type for e in received] == [
            EventType.STAKE_CHANGED,
            EventType.ROUND_STARTED,
            EventType.ROUND_SETTLED,
            EventType.QUOTES_REFRESHED,
            EventType.ROUND_ADVANCED,
            EventType.TERMS_REFRESHED,
        ]
        settled_event = received[2]
        assert settled_event.round_number == 1
        assert settled_event.data['round_number'] == 1

    def test_rejected_commands_leave_state_unchanged(self):
        """测试被拒绝的命令不改变状态"""
        command_service, query_service, bus = _build_services()
        command_service.set_stake("sum_7", 600)
        command_service.set_stake("doubles", 500)

        before = query_service.get_game_state_snapshot().data
        result = command_service.start_round()
        after = query_service.get_game_state_snapshot().data

        assert result.error_code == "INSUFFICIENT_BANK"
        assert before.bankroll == after.bankroll
        assert before.stakes == after.stakes
        assert before.round_number == after.round_number
        assert after.phase == RoundPhase.IDLE.name
        assert bus.get_event_history(EventType.COMMAND_REJECTED)

    def test_reset_after_play(self):
        """测试游戏重置恢复初始状态"""
        command_service, query_service, _ = _build_services("high_roller")
        _play_rounds(command_service, 3)
        command_service.adjust_bank(-500)

        assert command_service.reset_game().success
        snapshot = query_service.get_game_state_snapshot().data
        assert snapshot.bankroll == 10000
        assert snapshot.round_number == 0
        assert snapshot.history_length == 0
        assert snapshot.stakes == {}
        assert snapshot.last_outcome is None


@pytest.mark.integration
@pytest.mark.anti_cheat
class TestModuleBoundaries:
    """模块边界反作弊测试"""

    def test_core_does_not_import_application(self):
        """测试核心层不依赖应用层和测试代码"""
        for module_info in pkgutil.walk_packages(wagerlab.core.__path__, prefix="wagerlab.core."):
            importlib.import_module(module_info.name)
            CoreUsageChecker.verify_no_external_dependencies(module_info.name)

    def test_services_use_real_core_objects(self):
        """测试服务持有真实的核心对象"""
        command_service, _, _ = _build_services()

        CoreUsageChecker.verify_real_objects(command_service.engine, "RoundSettlementEngine")
        CoreUsageChecker.verify_real_objects(command_service.state, "GameState")
        CoreUsageChecker.verify_real_objects(command_service.state.bank, "BankLedger")
        CoreUsageChecker.verify_module_boundaries(command_service.engine, ["wagerlab.core"])
