"""Clinic Directory Admin.

Desktop administration client for a clinical-practice user directory
hosted on Supabase.
"""

__version__ = "0.1.0"
