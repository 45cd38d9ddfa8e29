"""
Core staking algorithms
"""
