"""HR and payroll REST API.

The package is organized by feature modules (employees, attendance, requests,
sales, payroll, ...) with a thin Flask controller layer on top of
service/repository layers.
"""

__version__ = "1.0.0"
