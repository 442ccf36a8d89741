"""Core domain package for unitwatch.

Core contains listing keys, diffing, error dedup and the poll/report state
machine without any Telegram, HTTP or HTML-specific code, keeping the
business logic portable.
"""
