"""
Cards, hands and deals.

Hands are immutable 13-card values. The evaluator derives HCP and shape on
demand; the deal generator produces constrained deals by rejection sampling.
"""
