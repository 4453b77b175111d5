"""
wagerlab - 三游戏下注与回合结算引擎

Packages:
    core: 纯领域逻辑（随机源、结果生成、概率表、赔率、做市、结算引擎）
    application: 应用服务层（命令/查询服务、配置、边界DTO）
"""

__version__ = "1.0.0"
