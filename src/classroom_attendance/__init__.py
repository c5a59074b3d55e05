"""Classroom attendance package.

Organized by feature modules (teachers, groups, students, attendance,
reports) over a SQLite store, with thin Flask controllers on top of the
service/repository layers.
"""
