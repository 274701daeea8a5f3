"""
Services: third-party adapters, parsers and import pipelines
"""
