"""Errors raised while delivering notifications."""


class DuplicateDeliveryError(Exception):
    """A delivery record already exists for this reservation and type."""


class DeliveryLogUnavailable(Exception):
    """The delivery log could not be read."""


class DispatchFailed(Exception):
    """The transport did not accept the message."""
