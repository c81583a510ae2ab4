"""Lesson Payroll package.

Feature modules (teachers, attendance, timetable, payroll, ...) each carry a
model, a repository protocol with its MySQL implementation, a service layer
and a thin Flask controller.
"""
