"""Absence tracker package.

Organized by feature modules (employees, absences, stats, ...) with a data
store contract and its backends (local document store, remote HTTP API,
MySQL), a service facade and a thin Flask controller layer.
"""
