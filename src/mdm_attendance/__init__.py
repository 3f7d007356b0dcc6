"""Midday-meal attendance reporting package.

Organized by feature modules (attendance, reports) with a thin Flask
controller layer over service/repository layers. The report aggregation
engine under ``reports`` is pure and has no I/O.
"""
