"""bankflow-gateway: bills, recurring payment history and loan underwriting."""

__version__ = "0.1.0"
