"""Member Portal package.

This package is organized by feature modules (members, interests, sessions,
feedback, attendance, ...) with a thin Flask controller layer and
service/repository layers underneath.
"""
