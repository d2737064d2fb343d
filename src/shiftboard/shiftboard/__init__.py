"""Shiftboard package.

Organized by feature modules (employees, shifts) with a thin Flask
controller layer on top of service/repository layers.
"""
