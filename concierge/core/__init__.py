"""
Core domain logic: admission control, content sync, sessions, completion
providers and transcript export.
"""
