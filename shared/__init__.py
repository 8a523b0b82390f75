"""
Shared Kernel

Value objects, domain events and the transaction/event plumbing shared by
the units, reservations, pricing and notifications apps.
"""
