"""Pricing app package.

Stores rate-adjustment rules and turns them into price quotes for a unit
and a candidate stay.
"""
