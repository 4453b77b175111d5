"""
Test Configuration - pytest配置文件

该文件提供测试的基础设施，包括：
- 通用的测试fixture（确定性随机源、独立事件总线、结算引擎）
- 反作弊检查配置
- 测试标记定义

所有测试都会自动加载这些配置。
"""

import sys

import pytest

from wagerlab.application import ConfigService, GameCommandService, GameQueryService
from wagerlab.core.events import EventBus, get_event_bus, set_event_bus
from wagerlab.core.market import MarketPricer
from wagerlab.core.rng import RandomSource
from wagerlab.core.settlement import RoundSettlementEngine
from wagerlab.tests.anti_cheat.core_usage_checker import CoreUsageChecker
from wagerlab.tests.fixtures import FixedOddsGenerator, ScriptedOutcomeGenerator


@pytest.fixture
def core_usage_checker():
    """核心使用检查器fixture"""
    return CoreUsageChecker()


@pytest.fixture
def random_source():
    """固定种子的随机源"""
    return RandomSource(seed=12345)


@pytest.fixture
def event_bus():
    """独立的事件总线，测试结束后恢复全局实例"""
    previous = get_event_bus()
    bus = EventBus()
    set_event_bus(bus)
    yield bus
    set_event_bus(previous)


@pytest.fixture
def scripted_outcomes():
    return ScriptedOutcomeGenerator()


@pytest.fixture
def fixed_odds():
    return FixedOddsGenerator(multiplier=2.0)


@pytest.fixture
def engine(random_source, event_bus, scripted_outcomes, fixed_odds):
    """结果和条款都可控的结算引擎"""
    return RoundSettlementEngine(
        random_source=random_source,
        event_bus=event_bus,
        outcome_generator=scripted_outcomes,
        odds_generator=fixed_odds,
        market_pricer=MarketPricer(random_source),
    )


@pytest.fixture
def game_state(engine):
    """初始余额1000、初始报价21/23的新游戏状态"""
    return engine.new_game_state()


@pytest.fixture
def config_service():
    """独立的配置服务"""
    return ConfigService()


@pytest.fixture
def command_service(engine, config_service, event_bus):
    return GameCommandService(engine=engine, config_service=config_service, event_bus=event_bus)


@pytest.fixture
def query_service(command_service):
    return GameQueryService(command_service)


@pytest.fixture
def mock_detector():
    """Mock对象检测器fixture"""
    def _detect_mocks(*objects):
        """检测对象中是否包含mock"""
        for obj in objects:
            if hasattr(obj, '_mock_name') or hasattr(obj, 'call_count'):
                pytest.fail(f"检测到mock对象: {obj}, 测试必须使用真实对象")
    return _detect_mocks


@pytest.fixture(autouse=True)
def prevent_mock_usage(request):
    """自动防止mock使用的fixture"""
    # 只在标记为需要反作弊检查的测试中启用
    if request.node.get_closest_marker("anti_cheat"):
        for module_name in ['unittest.mock', 'mock', 'pytest_mock']:
            if module_name in sys.modules:
                original_module = sys.modules.pop(module_name)
                request.addfinalizer(
                    lambda name=module_name, module=original_module: sys.modules.__setitem__(name, module)
                )


# 测试标记定义
def pytest_configure(config):
    """pytest配置"""
    config.addinivalue_line(
        "markers", "unit: 标记单元测试"
    )
    config.addinivalue_line(
        "markers", "anti_cheat: 标记需要反作弊检查的测试"
    )
    config.addinivalue_line(
        "markers", "property_test: 标记基于属性的测试"
    )
    config.addinivalue_line(
        "markers", "integration: 标记集成测试"
    )


# 自定义断言帮助函数
def assert_real_object(obj, expected_type_name: str):
    """断言对象是真实的核心对象"""
    CoreUsageChecker.verify_real_objects(obj, expected_type_name)
