"""
Customers domain package.

Public API:
- Domain models: Customer, Tier, ServiceStatus
- Validation error: CustomerValidationError
- Mock data: generate_customers, load_customers_csv, write_customers_csv
"""
from .models import Customer, CustomerValidationError, ServiceStatus, Tier
from .generator import generate_customers, load_customers_csv, write_customers_csv

__all__ = [
    "Customer",
    "CustomerValidationError",
    "ServiceStatus",
    "Tier",
    "generate_customers",
    "load_customers_csv",
    "write_customers_csv",
]
