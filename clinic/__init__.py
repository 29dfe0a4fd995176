"""
Clinic Management System

A FastAPI-based clinic backend: admins manage doctors, patients register and
book one-hour appointments, doctors manage availability and prescriptions.
"""

__version__ = "1.0.0"
