"""
结算不变量检查器

bank_after = bank_before - total_stake + winnings + market_pnl + market_committed
必须精确成立。
"""

from typing import Dict, List, TYPE_CHECKING

from ..market import MIN_CARD_SUM, MAX_CARD_SUM
from ..odds import MIN_MULTIPLIER
from .types import InvariantType, InvariantViolation, InvariantCheckResult, InvariantError

if TYPE_CHECKING:
    from ..settlement.types import SettlementResult
    from ..store import GameState

__all__ = ['SettlementInvariantChecker']


class SettlementInvariantChecker:
    """结算不变量检查器"""

    def check_settlement_equation(self, result: 'SettlementResult') -> InvariantCheckResult:
        """只检查结算结果本身的等式，不读取状态"""
        return InvariantCheckResult.from_violations(
            InvariantType.BANK_CONSERVATION, self._equation_violations(result)
        )

    def check_bank_conservation(self, result: 'SettlementResult',
                                state: 'GameState') -> InvariantCheckResult:
        """结算等式以及存储中的余额与结算结果一致"""
        violations = self._equation_violations(result)
        if state.bankroll != result.bank_after:
            violations.append(self._violation(
                InvariantType.BANK_CONSERVATION,
                f"存储余额{state.bankroll}与结算结果{result.bank_after}不一致",
            ))
        return InvariantCheckResult.from_violations(InvariantType.BANK_CONSERVATION, violations)

    def check_commitment(self, result: 'SettlementResult') -> InvariantCheckResult:
        """提交的总额不超过提交前的余额，零赌注总是合法"""
        violations = []
        if result.total_stake > 0 and result.total_stake > result.bank_before:
            violations.append(self._violation(
                InvariantType.COMMITMENT,
                f"提交总额{result.total_stake}超过余额{result.bank_before}",
            ))
        return InvariantCheckResult.from_violations(InvariantType.COMMITMENT, violations)

    def check_quote_range(self, state: 'GameState') -> InvariantCheckResult:
        violations = []
        quote = state.market_quote
        if not (MIN_CARD_SUM <= quote.bid < quote.ask <= MAX_CARD_SUM):
            violations.append(self._violation(
                InvariantType.QUOTE_RANGE,
                f"报价越界: bid={quote.bid}, ask={quote.ask}",
            ))
        return InvariantCheckResult.from_violations(InvariantType.QUOTE_RANGE, violations)

    def check_terms_floor(self, state: 'GameState') -> InvariantCheckResult:
        violations = [
            self._violation(
                InvariantType.TERMS_FLOOR,
                f"{bet_id.value}的倍数{terms.multiplier}低于{MIN_MULTIPLIER}",
            )
            for bet_id, terms in state.terms.items()
            if terms.multiplier < MIN_MULTIPLIER
        ]
        return InvariantCheckResult.from_violations(InvariantType.TERMS_FLOOR, violations)

    def check_history_bound(self, state: 'GameState') -> InvariantCheckResult:
        violations = []
        if len(state.history) > state.history_limit:
            violations.append(self._violation(
                InvariantType.HISTORY_BOUND,
                f"历史长度{len(state.history)}超过上限{state.history_limit}",
            ))
        return InvariantCheckResult.from_violations(InvariantType.HISTORY_BOUND, violations)

    def check_result(self, result: 'SettlementResult',
                     raise_on_violation: bool = False) -> Dict[InvariantType, InvariantCheckResult]:
        """
        在写回状态之前检查结算结果

        Raises:
            InvariantError: 当raise_on_violation=True且有严重违反时
        """
        results = {
            InvariantType.BANK_CONSERVATION: self.check_settlement_equation(result),
            InvariantType.COMMITMENT: self.check_commitment(result),
        }
        if raise_on_violation:
            self._raise_on_critical(results)
        return results

    def check_all(self, result: 'SettlementResult', state: 'GameState',
                  raise_on_violation: bool = False) -> Dict[InvariantType, InvariantCheckResult]:
        """
        检查所有不变量

        Raises:
            InvariantError: 当raise_on_violation=True且有严重违反时
        """
        results = {
            InvariantType.BANK_CONSERVATION: self.check_bank_conservation(result, state),
            InvariantType.COMMITMENT: self.check_commitment(result),
            InvariantType.QUOTE_RANGE: self.check_quote_range(state),
            InvariantType.TERMS_FLOOR: self.check_terms_floor(state),
            InvariantType.HISTORY_BOUND: self.check_history_bound(state),
        }
        if raise_on_violation:
            self._raise_on_critical(results)
        return results

    def _equation_violations(self, result: 'SettlementResult') -> List[InvariantViolation]:
        expected = (result.bank_before - result.total_stake + result.winnings
                    + result.market_pnl + result.market_committed)
        if result.bank_after == expected:
            return []
        return [self._violation(
            InvariantType.BANK_CONSERVATION,
            f"结算等式不成立: 期望{expected}，实际{result.bank_after}",
            bank_before=result.bank_before, total_stake=result.total_stake,
            winnings=result.winnings, market_pnl=result.market_pnl,
            market_committed=result.market_committed, bank_after=result.bank_after,
        )]

    @staticmethod
    def _raise_on_critical(results: Dict[InvariantType, InvariantCheckResult]) -> None:
        violations: List[InvariantViolation] = [
            v for r in results.values() for v in r.violations
        ]
        critical = [v for v in violations if v.severity == 'CRITICAL']
        if critical:
            raise InvariantError(f"发现{len(critical)}个严重不变量违反", violations)

    @staticmethod
    def _violation(invariant_type: InvariantType, description: str,
                   severity: str = 'CRITICAL', **context) -> InvariantViolation:
        return InvariantViolation(
            invariant_type=invariant_type,
            description=description,
            severity=severity,
            context=dict(context),
        )
