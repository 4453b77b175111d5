"""
测试用的确定性生成器

使用真实的生成器子类固定结果和条款，而不是mock。
"""

from collections import deque
from typing import Dict, Iterable, Optional

from wagerlab.core.bets import BetId
from wagerlab.core.odds import Bias, OddsGenerator, Terms
from wagerlab.core.outcome import Outcome, OutcomeGenerator
from wagerlab.core.rng import RandomSource


class ScriptedOutcomeGenerator(OutcomeGenerator):
    """按顺序返回预设结果，用完后回退到随机抽样"""

    def __init__(self, outcomes: Iterable[Outcome] = (), random_source: Optional[RandomSource] = None):
        super().__init__(random_source or RandomSource(seed=0))
        self._queue = deque(outcomes)

    def push(self, outcome: Outcome) -> None:
        self._queue.append(outcome)

    def generate(self) -> Outcome:
        if self._queue:
            return self._queue.popleft()
        return super().generate()


class FixedOddsGenerator(OddsGenerator):
    """所有下注使用同一个倍数，可按下注覆盖"""

    def __init__(self, multiplier: float = 2.0, overrides: Optional[Dict[BetId, float]] = None):
        super().__init__(RandomSource(seed=0))
        self._multiplier = multiplier
        self._overrides = dict(overrides or {})
        self.generation_count = 0

    def generate_all_terms(self) -> Dict[BetId, Terms]:
        self.generation_count += 1
        return {
            bet_id: Terms(multiplier=self._overrides.get(bet_id, self._multiplier), bias=Bias.FAIR)
            for bet_id in BetId
        }
