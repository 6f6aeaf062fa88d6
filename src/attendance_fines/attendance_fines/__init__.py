"""Attendance Fines package.

This package is organized by feature modules (events, attendance, fines,
ledger, ...) with a thin Flask controller layer on top of service/repository
layers. Persistence is reached through repository protocols bound to an
explicitly constructed store handle.
"""
