"""
Auction legality state machine.

Immutable call and auction values plus pure functions for bid comparison,
call legality, completion detection and contract/declarer derivation.
"""
