"""Reservations app package.

Owns the reservation store (the only writer of reservations), the derived
availability index and the date selection state machine.
"""
