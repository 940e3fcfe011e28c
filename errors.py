"""
Error taxonomy for the storefront core.

Every member is recoverable: the adapter turns it into an error notice and an
HTTP status, and the user can retry. ``status_code`` is what the adapter uses.
"""


class StorefrontError(Exception):
    status_code = 400
    title = "Something went wrong"

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.title)
        self.detail = detail or self.title


class EmptyCart(StorefrontError):
    status_code = 409
    title = "Cart is empty"


class InvalidCoupon(StorefrontError):
    status_code = 422
    title = "Invalid coupon code"


class InsufficientFunds(StorefrontError):
    status_code = 402
    title = "Insufficient wallet balance"


class InvalidTopUp(StorefrontError):
    status_code = 422
    title = "Invalid amount"


class ProductNotFound(StorefrontError):
    status_code = 404
    title = "Product not found"


class OrderNotFound(StorefrontError):
    status_code = 404
    title = "Order not found"


class InvalidStatusTransition(StorefrontError):
    status_code = 409
    title = "Invalid status change"


class AddressNotFound(StorefrontError):
    status_code = 404
    title = "Address not found"


class PaymentMethodNotFound(StorefrontError):
    status_code = 404
    title = "Payment method not found"


# Owned by the auth collaborator

class InvalidCredentials(StorefrontError):
    status_code = 401
    title = "Login failed"


class RegistrationFailed(StorefrontError):
    status_code = 422
    title = "Registration failed"


class NotAuthenticated(StorefrontError):
    status_code = 401
    title = "Please sign in"


class Forbidden(StorefrontError):
    status_code = 403
    title = "Insufficient permissions"
