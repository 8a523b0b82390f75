"""Units app package.

A unit is a bookable room or apartment. The app exposes the unit catalogue,
the booked-interval calendar of each unit and the interactive date
selection endpoint that drives check-in/check-out picking.
"""
