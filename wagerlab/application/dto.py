"""数据传输对象定义.

这个模块定义了外部输入进入命令服务之前的标准格式。
使用Pydantic dataclass在边界处完成强制转换：非数字的金额和单位一律视为0，
负数赌注钳为0，引擎永远不会收到非数字输入。
"""

from typing import Any, Optional

from pydantic.dataclasses import dataclass as pydantic_dataclass
from pydantic import Field, field_validator

from ..core.bets import BetId
from ..core.market import TradeSide

__all__ = ['StakeInput', 'TradeInput', 'BankAdjustmentInput', 'coerce_int']


def coerce_int(value: Any) -> int:
    """把任意输入转换为整数，无法解析时返回0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        value = value.strip()
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


@pydantic_dataclass
class StakeInput:
    """赌注输入.

    amount为非数字时视为0，负数钳为0。
    """
    bet_id: BetId = Field(..., description="下注标识")
    amount: int = Field(0, ge=0, description="赌注金额")

    @field_validator('amount', mode='before')
    @classmethod
    def coerce_amount(cls, v):
        return max(0, coerce_int(v))


@pydantic_dataclass
class TradeInput:
    """市场交易输入.

    units为非数字时视为0（随后被引擎拒绝）；price可省略，省略时按报价侧价成交。
    """
    side: TradeSide = Field(..., description="交易方向")
    units: int = Field(0, description="交易单位")
    price: Optional[int] = Field(None, description="成交价格")

    @field_validator('side', mode='before')
    @classmethod
    def normalize_side(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator('units', mode='before')
    @classmethod
    def coerce_units(cls, v):
        return coerce_int(v)

    @field_validator('price', mode='before')
    @classmethod
    def coerce_price(cls, v):
        if v is None or v == "":
            return None
        return coerce_int(v)


@pydantic_dataclass
class BankAdjustmentInput:
    """银行调整输入."""
    delta: int = Field(0, description="余额变化量，可为负")

    @field_validator('delta', mode='before')
    @classmethod
    def coerce_delta(cls, v):
        return coerce_int(v)
