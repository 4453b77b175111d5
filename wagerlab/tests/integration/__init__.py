"""
Integration Tests - 集成测试

通过命令服务和查询服务驱动完整的多回合流程。
"""
