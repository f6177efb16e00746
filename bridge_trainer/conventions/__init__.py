"""
Bidding conventions.

Conditions are composed into rule trees; the evaluator walks a tree against a
bidding context and records every decision it made along the way.
"""
