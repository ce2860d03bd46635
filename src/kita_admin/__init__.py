"""Kita admin package.

Organized by feature modules (groups, children, teachers, schedules, ...)
with a thin Flask controller layer on top of service/repository layers.
"""
