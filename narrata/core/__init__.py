"""
Core: configuration, database, security, errors, responses
"""
