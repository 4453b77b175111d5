"""
Tests Module - 测试框架

Test Categories:
    unit/: 单元测试 - 测试单个模块功能
    property/: 性质测试 - 验证结算等式、报价范围等数学不变量
    integration/: 集成测试 - 测试多回合的模块协作
    anti_cheat/: 反作弊系统 - 确保测试使用真实的核心对象
"""
