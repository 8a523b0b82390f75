"""
Reservation Domain Events

Events that represent things that have happened to a reservation.
These are published after successful transaction commits.
"""

from dataclasses import dataclass

from shared.domain.base import DomainEvent


@dataclass
class ReservationCreated(DomainEvent):
    """
    Event: A reservation was committed by the guest-facing flow

    Triggers:
    - Send booking confirmation to guest
    """
    reservation_id: int
    unit_id: int

    def to_dict(self) -> dict:
        return {
            **super().to_dict(),
            'reservation_id': self.reservation_id,
            'unit_id': self.unit_id,
        }


@dataclass
class ReservationPaid(DomainEvent):
    """
    Event: Staff marked the reservation's payment as received

    Triggers:
    - Send payment receipt to guest
    """
    reservation_id: int

    def to_dict(self) -> dict:
        return {**super().to_dict(), 'reservation_id': self.reservation_id}
