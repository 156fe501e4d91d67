class PharmacyError(Exception):
    """Base class for errors raised by healthpoint_pos."""


class ValidationError(PharmacyError):
    """Bad form or cart input; raised before the database is touched."""


class NotFoundError(PharmacyError):
    pass


class AuthenticationError(PharmacyError):
    pass


class OrderPlacementError(PharmacyError):
    """The order transaction failed and was rolled back.

    The originating exception is available as ``__cause__``.
    """

    def __init__(self, message, order_id=None):
        super().__init__(message)
        self.order_id = order_id
