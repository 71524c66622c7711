"""Mismo rules and session bookkeeping.

``resolution`` turns one round of submissions into lives lost, and
``registry`` maps session ids to live games. Neither knows about Flask.
"""
