"""Time Tracker package.

Feature modules (timeclock, schedules, payroll, workers, auth) each keep their
domain model, a repository protocol and a service; a thin Flask controller
layer exposes them as a JSON API.
"""
