"""Committee Portal package.

Organized by feature modules (users, members, attendance, teams, reports,
settings) with a thin Flask controller layer over service/repository layers.
"""
