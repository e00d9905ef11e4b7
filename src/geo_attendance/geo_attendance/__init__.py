"""Geo Attendance package.

Feature modules (attendance, schedules, locations, ...) with a thin Flask
controller layer on top of service/repository layers.
"""
