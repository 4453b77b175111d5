"""
Property Tests - 性质测试

该目录包含基于hypothesis的性质测试，验证结算等式、报价范围和条款下限。
"""
