"""Crew Timesheet Admin package.

This package is organized by feature modules (contracts, crews, timesheets,
incidents, weekly, dashboard, ...) with a thin Flask controller layer over
service/repository layers.
"""
