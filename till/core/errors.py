# till/core/errors.py
class BusinessError(Exception):
    """Base for every operator-facing failure.

    The message is shown to the operator as-is, so keep it short and
    human readable.
    """

    default_message = "Operation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class OutOfStock(BusinessError):
    default_message = "Product out of stock"


class StockExceeded(BusinessError):
    default_message = "Not enough stock available"

    def __init__(self, available: int):
        self.available = available
        super().__init__(f"Only {available} items available")


class EmptyCart(BusinessError):
    default_message = "Cart is empty"


class InsufficientPayment(BusinessError):
    default_message = "Amount paid is less than total"


class CheckoutInProgress(BusinessError):
    default_message = "A checkout is already being processed"


class SubmissionFailed(BusinessError):
    default_message = "Transaction failed"


class CatalogLoadFailed(BusinessError):
    default_message = "Failed to load products"


class InvalidProductInput(BusinessError):
    default_message = "Invalid product details"

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class ProductNotFound(BusinessError):
    default_message = "Product not found"


class ProductSaveFailed(BusinessError):
    default_message = "Failed to save product"


class HistoryLoadFailed(BusinessError):
    default_message = "Failed to load transactions"
