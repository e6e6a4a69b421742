"""
clinicslots - appointment slot availability and conflict resolution for clinics.
"""

__version__ = "0.1.0"
