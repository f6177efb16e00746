"""
Bridge Trainer - Bidding Convention Decision Engine

An interactive trainer for contract-bridge bidding conventions. Deals hands,
advances a bidding auction, and checks a trainee's call against what a named
convention's rule tree would call, with a fully inspectable decision trace.
"""

__version__ = "0.1.0"
__author__ = "Bridge Trainer Team"
