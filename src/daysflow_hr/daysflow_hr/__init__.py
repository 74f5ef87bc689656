"""DaysFlow HR package.

Organized by feature modules (compensation, attendance, leave, payroll)
with a thin Flask controller layer over service/repository layers.
"""
