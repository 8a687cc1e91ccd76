"""
Typed Exception Hierarchy for the Stock Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the ledger engine (the console menu, the CSV/XML adapters, tests)
must react to failures by TYPE, never by parsing messages:

    try:
        engine.apply_exit(product_id, 5)
    except InsufficientStockOrNotFoundError as e:
        print(f"Cannot remove {e.quantity} units from product {e.product_id}")

Every exception carries:
  1. A `code` class attribute (machine-readable, stable)
  2. Structured attributes (product_id, quantity, ...)
  3. A human-readable message (str(exc))

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    StockKernelError (base)
    |
    +-- ValidationError
    |   +-- InvalidQuantityError
    |   +-- InvalidDateFormatError
    |   +-- InvalidLimitError
    |   +-- InvalidProductFieldError
    |
    +-- ProductError
    |   +-- ProductNotFoundError
    |   +-- InsufficientStockOrNotFoundError
    |
    +-- LedgerError
    |   +-- TransactionFailureError
    |   +-- CascadeContractError
    |
    +-- ImmutabilityError
    |   +-- ImmutabilityViolationError
    |
    +-- ImportExportError
        +-- CsvValidationError
        +-- XmlSchemaError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category      | Code                             | When Raised
--------------|----------------------------------|-------------------------------------
Validation    | INVALID_QUANTITY                 | quantity <= 0, negative stock
              | INVALID_DATE_FORMAT              | date not YYYY-MM-DD / not a date
              | INVALID_LIMIT                    | ranking limit <= 0
              | INVALID_PRODUCT_FIELD            | empty name or category
--------------|----------------------------------|-------------------------------------
Product       | PRODUCT_NOT_FOUND                | no product matches id / name
              | INSUFFICIENT_STOCK_OR_NOT_FOUND  | guarded decrement matched 0 rows
--------------|----------------------------------|-------------------------------------
Ledger        | TRANSACTION_FAILURE              | store error during a transaction
              | CASCADE_CONTRACT_VIOLATION       | product delete outside the cascade
--------------|----------------------------------|-------------------------------------
Immutability  | IMMUTABILITY_VIOLATION           | UPDATE/DELETE of a movement row
--------------|----------------------------------|-------------------------------------
Import/Export | CSV_VALIDATION_FAILED            | malformed CSV batch (nothing loaded)
              | XML_SCHEMA_INVALID               | XML document fails schema checks

===============================================================================
DESIGN DECISIONS
===============================================================================

1. WHY IS "INSUFFICIENT STOCK" CONFLATED WITH "NOT FOUND"?
   The guarded decrement is a single conditional UPDATE. Zero affected rows
   means either the product is missing or its stock is too low, and the
   engine cannot tell which without a second, racy read. Callers treat both
   the same way (the exit did not happen).

2. WHY VALIDATION ERRORS SEPARATE FROM STORE ERRORS?
   Validation errors are raised before the store is touched and never need
   rollback. TransactionFailureError always means a rollback happened.

===============================================================================
"""


class StockKernelError(Exception):
    """
    Base exception for all stock kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "STOCK_KERNEL_ERROR"


# Validation exceptions


class ValidationError(StockKernelError):
    """Base exception for input validation errors (raised before any store access)."""

    code: str = "VALIDATION_ERROR"


class InvalidQuantityError(ValidationError):
    """Quantity is not strictly positive (or a stock level is negative)."""

    code: str = "INVALID_QUANTITY"

    def __init__(self, quantity: int, reason: str = "quantity must be greater than 0"):
        self.quantity = quantity
        self.reason = reason
        super().__init__(f"Invalid quantity {quantity}: {reason}")


class InvalidDateFormatError(ValidationError):
    """Date string is not a well-formed YYYY-MM-DD calendar date."""

    code: str = "INVALID_DATE_FORMAT"

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid date format '{value}'. Use YYYY-MM-DD")


class InvalidLimitError(ValidationError):
    """Ranking limit is not strictly positive."""

    code: str = "INVALID_LIMIT"

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Invalid limit {limit}: limit must be greater than 0")


class InvalidProductFieldError(ValidationError):
    """A required product field is empty."""

    code: str = "INVALID_PRODUCT_FIELD"

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Product field '{field_name}' must not be empty")


# Product exceptions


class ProductError(StockKernelError):
    """Base exception for product lookup and stock errors."""

    code: str = "PRODUCT_ERROR"


class ProductNotFoundError(ProductError):
    """No product matches the given id or name."""

    code: str = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: int | None = None, name: str | None = None):
        self.product_id = product_id
        self.name = name
        if name is not None:
            super().__init__(f"Product not found: name='{name}'")
        else:
            super().__init__(f"Product not found: {product_id}")


class InsufficientStockOrNotFoundError(ProductError):
    """
    Guarded decrement matched zero rows.

    Either the product does not exist or its stock is below the requested
    quantity. The two cases are deliberately not distinguished.
    """

    code: str = "INSUFFICIENT_STOCK_OR_NOT_FOUND"

    def __init__(self, product_id: int, quantity: int):
        self.product_id = product_id
        self.quantity = quantity
        super().__init__(
            f"Insufficient stock or product not found: "
            f"product {product_id}, requested {quantity}"
        )


# Ledger / transaction exceptions


class LedgerError(StockKernelError):
    """Base exception for ledger transaction errors."""

    code: str = "LEDGER_ERROR"


class TransactionFailureError(LedgerError):
    """
    The underlying store failed during a multi-step operation.

    The transaction was rolled back; no partial effect is observable.
    """

    code: str = "TRANSACTION_FAILURE"

    def __init__(self, operation: str, product_id: int | None, reason: str):
        self.operation = operation
        self.product_id = product_id
        self.reason = reason
        target = f" (product {product_id})" if product_id is not None else ""
        super().__init__(f"Transaction failed during {operation}{target}: {reason}")


class CascadeContractError(LedgerError):
    """A product delete was attempted outside the cascading-delete transaction."""

    code: str = "CASCADE_CONTRACT_VIOLATION"

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(
            f"Product {product_id} may only be deleted through "
            f"StockLedgerEngine.delete_product_cascade"
        )


# Immutability exceptions


class ImmutabilityError(StockKernelError):
    """Base exception for immutability-related errors."""

    code: str = "IMMUTABILITY_ERROR"


class ImmutabilityViolationError(ImmutabilityError):
    """Attempted to modify or delete an append-only movement record."""

    code: str = "IMMUTABILITY_VIOLATION"

    def __init__(self, entity_type: str, entity_id: str, reason: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(
            f"Immutability violation on {entity_type} {entity_id}: {reason}"
        )


# Import / export exceptions


class ImportExportError(StockKernelError):
    """Base exception for CSV / XML / JSON adapter errors."""

    code: str = "IMPORT_EXPORT_ERROR"


class CsvValidationError(ImportExportError):
    """CSV batch failed validation; nothing was written."""

    code: str = "CSV_VALIDATION_FAILED"

    def __init__(self, source: str, error_count: int, error_log: str):
        self.source = source
        self.error_count = error_count
        self.error_log = error_log
        super().__init__(
            f"CSV file {source} has {error_count} malformed line(s); "
            f"see {error_log} for details. Nothing was imported"
        )


class XmlSchemaError(ImportExportError):
    """XML document does not match the inventory schema."""

    code: str = "XML_SCHEMA_INVALID"

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"XML validation error in {source}: {reason}")
