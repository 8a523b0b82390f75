"""Notifications app package.

Guest emails tied to a reservation: the immediate confirmation and payment
receipt, plus the scheduled pre-arrival and review-request messages. Every
message is recorded in the delivery log, which guarantees at most one
delivery per reservation and notification type.
"""
