"""
赔率生成和做市报价的单元测试
"""

from collections import Counter
from fractions import Fraction

import pytest

from wagerlab.core.bets import BetId
from wagerlab.core.market import MarketPosition, MarketPricer, MarketQuote, TradeSide
from wagerlab.core.odds import (
    BIAS_RANGES,
    BIAS_WEIGHTS,
    MIN_MULTIPLIER,
    Bias,
    OddsGenerator,
    Terms,
    round_half_up,
)
from wagerlab.core.rng import RandomSource

from wagerlab.tests.anti_cheat.core_usage_checker import CoreUsageChecker


@pytest.mark.unit
class TestOddsGenerator:
    """赔率生成器测试"""

    def test_fair_multiplier(self):
        """测试保本倍数"""
        assert OddsGenerator.fair_multiplier(Fraction(1, 8)) == pytest.approx(8.0)
        assert OddsGenerator.fair_multiplier(Fraction(1, 2)) == pytest.approx(2.0)

    def test_fair_multiplier_floor(self):
        """测试高概率的保本倍数不低于1.1"""
        assert OddsGenerator.fair_multiplier(Fraction(99, 100)) == MIN_MULTIPLIER
        assert OddsGenerator.fair_multiplier(1) == MIN_MULTIPLIER

    @pytest.mark.parametrize("probability", [0, -0.1, 1.5, Fraction(3, 2)])
    def test_fair_multiplier_rejects_invalid_probability(self, probability):
        """测试概率不在(0, 1]内时被拒绝"""
        with pytest.raises(ValueError):
            OddsGenerator.fair_multiplier(probability)

    def test_terms_never_below_floor(self):
        """测试条款倍数永远不低于1.1"""
        generator = OddsGenerator(RandomSource(seed=21))
        for probability in (Fraction(1, 8), Fraction(1, 2), Fraction(9, 10), Fraction(1, 1)):
            for _ in range(500):
                terms = generator.generate_terms(probability)
                assert terms.multiplier >= MIN_MULTIPLIER

    def test_multiplier_within_bias_range(self):
        """测试倍数落在偏置区间内（允许一位小数的取整误差）"""
        generator = OddsGenerator(RandomSource(seed=3))
        fair = OddsGenerator.fair_multiplier(Fraction(1, 8))
        for _ in range(1000):
            terms = generator.generate_terms(Fraction(1, 8))
            bias_range = BIAS_RANGES[terms.bias]
            assert fair * bias_range.low - 0.05 <= terms.multiplier <= fair * bias_range.high + 0.05

    def test_multiplier_has_one_decimal(self):
        """测试倍数保留一位小数"""
        generator = OddsGenerator(RandomSource(seed=17))
        for _ in range(200):
            multiplier = generator.generate_terms(Fraction(11, 36)).multiplier
            assert round(multiplier * 10) == pytest.approx(multiplier * 10)

    def test_bias_frequencies(self):
        """测试100000次抽样的偏置频率在2%以内"""
        generator = OddsGenerator(RandomSource(seed=2024))
        draws = 100_000
        counts = Counter(generator.generate_bias() for _ in range(draws))
        for bias, weight in BIAS_WEIGHTS.items():
            assert abs(counts[bias] / draws - weight) < 0.02, bias

    def test_generate_all_terms_covers_every_bet(self):
        """测试为全部18个下注生成条款"""
        terms = OddsGenerator(RandomSource(seed=1)).generate_all_terms()
        assert set(terms) == set(BetId)
        for value in terms.values():
            # 反作弊检查
            CoreUsageChecker.verify_real_objects(value, "Terms")

    def test_round_half_up(self):
        """测试half-up取整"""
        assert round_half_up(2.25, 1) == pytest.approx(2.3)
        assert round_half_up(2.24, 1) == pytest.approx(2.2)
        assert round_half_up(0.5) == 1

    def test_terms_validation(self):
        """测试条款验证"""
        with pytest.raises(ValueError):
            Terms(multiplier=1.0, bias=Bias.FAIR)
        with pytest.raises(TypeError):
            Terms(multiplier=2.0, bias="fair")

    def test_bias_weights_sum_to_one(self):
        assert sum(BIAS_WEIGHTS.values()) == pytest.approx(1.0)


@pytest.mark.unit
class TestMarketPricer:
    """做市报价器测试"""

    def test_quotes_within_range(self):
        """测试所有报价满足3 <= bid < ask <= 39"""
        pricer = MarketPricer(RandomSource(seed=99))
        for _ in range(5000):
            quote = pricer.generate_quotes()
            assert 3 <= quote.bid < quote.ask <= 39

    def test_spread_bounds(self):
        """测试点差在1到4之间（推移最多缩小1）"""
        pricer = MarketPricer(RandomSource(seed=12))
        spreads = {pricer.generate_quotes().spread for _ in range(2000)}
        assert spreads <= {1, 2, 3, 4}

    def test_quote_validation(self):
        """测试无效报价被拒绝"""
        for bid, ask in [(2, 5), (10, 40), (20, 20), (21, 19)]:
            with pytest.raises(ValueError):
                MarketQuote(bid=bid, ask=ask)

    def test_price_for_side(self):
        """测试BUY按ask成交，SELL按bid成交"""
        quote = MarketQuote(bid=21, ask=23)
        assert MarketPricer.price_for(TradeSide.BUY, quote) == 23
        assert MarketPricer.price_for(TradeSide.SELL, quote) == 21
        with pytest.raises(ValueError):
            MarketPricer.price_for(TradeSide.NONE, quote)

    def test_settle_buy(self):
        """测试BUY头寸结算"""
        position = MarketPosition(side=TradeSide.BUY, units=5, price=23)
        assert MarketPricer.settle(position, 20) == -15
        assert MarketPricer.settle(position, 30) == 35

    def test_settle_sell(self):
        """测试SELL头寸结算"""
        position = MarketPosition(side=TradeSide.SELL, units=2, price=21)
        assert MarketPricer.settle(position, 18) == 6
        assert MarketPricer.settle(position, 25) == -8

    def test_settle_no_position(self):
        assert MarketPricer.settle(MarketPosition.empty(), 30) == 0


@pytest.mark.unit
class TestMarketPosition:
    """市场头寸测试"""

    def test_committed(self):
        """测试占用资金"""
        position = MarketPosition(side=TradeSide.BUY, units=5, price=23)

        # 反作弊检查
        CoreUsageChecker.verify_real_objects(position, "MarketPosition")

        assert position.committed == 115
        assert position.is_open

    def test_empty_position(self):
        position = MarketPosition.empty()
        assert not position.is_open
        assert position.committed == 0

    def test_invalid_positions(self):
        """测试无效头寸被拒绝"""
        with pytest.raises(ValueError):
            MarketPosition(side=TradeSide.BUY, units=-1, price=23)
        with pytest.raises(ValueError):
            MarketPosition(side=TradeSide.NONE, units=2, price=23)
