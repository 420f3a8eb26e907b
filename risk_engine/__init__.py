"""Health risk scoring and recommendation engine.

This package contains the rule-based disease risk scorers and the
template-driven recommendation generators, isolated from storage and
presentation so they can be tested and reasoned about in isolation.
"""
