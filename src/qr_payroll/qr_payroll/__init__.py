"""QR attendance and payroll package.

Organized by feature modules (employees, attendance, payroll, ...) with a thin
Flask controller layer over service/repository layers.
"""
