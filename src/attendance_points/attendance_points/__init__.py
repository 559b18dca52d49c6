"""Attendance Points package.

Organized by feature modules (geo, shifts, leaves, policy, payroll, ...)
with a thin Flask controller layer on top of service/repository layers.
The rule engine itself (geo, shifts, leaves, policy, payroll.converter)
does no I/O.
"""
