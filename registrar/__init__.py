"""
Registrar: an authoritative ledger of academic records.

Keeps students, courses, grades, derived GPA and credit totals, and an
append-only audit history of administrative actions, under a two-tier
administrator / everyone-else access model.
"""

__version__ = "1.0.0"
__author__ = "Registrar Development Team"
__description__ = "Authoritative ledger of academic records"
