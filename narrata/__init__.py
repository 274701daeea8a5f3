"""
Narrata backend
"""
